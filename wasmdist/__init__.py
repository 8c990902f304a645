"""wasmdist - build orchestrator for the wasm-pack package set."""

__version__ = "0.1.0"
