"""Exception definitions module."""

from wasmdist.core.exceptions.errors import (
    ConfigurationError,
    ExternalToolError,
    FormatError,
    OutputIOError,
    WasmDistError,
)

__all__ = [
    "WasmDistError",
    "ExternalToolError",
    "OutputIOError",
    "FormatError",
    "ConfigurationError",
]
