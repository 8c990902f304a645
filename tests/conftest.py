"""Pytest configuration and shared fixtures."""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from wasmdist.models.build import BuildMode, BuildResult, PackageBuildSpec, PipelineConfig
from wasmdist.pipeline.builder import PackageBuilder


class RecordingBuilder(PackageBuilder):
    """Fake compiler that records calls and writes wasm-pack shaped output."""

    def __init__(self, mode: BuildMode, fail_on: tuple[str, str] | None = None) -> None:
        """Initialize the fake builder.

        Args:
            mode: Build mode, decides which files are generated.
            fail_on: (package, output_name) pair that should fail.
        """
        self.mode = mode
        self.fail_on = fail_on
        self.calls: list[PackageBuildSpec] = []

    def build(self, spec: PackageBuildSpec) -> BuildResult:
        self.calls.append(spec)

        if self.fail_on == (spec.package, spec.output_name):
            return BuildResult(
                success=False,
                return_code=1,
                stderr="error: could not compile",
                command=f"fake build {spec.package}",
                error_message="error: could not compile",
                package=spec.package,
                output_name=spec.output_name,
            )

        name = spec.output_name
        out = spec.output_dir
        out.mkdir(parents=True, exist_ok=True)

        files = [f"{name}_bg.wasm", f"{name}.js", f"{name}.d.ts"]
        (out / f"{name}.js").write_text(f"// {spec.package} {name} glue\n", encoding="utf-8")
        (out / f"{name}.d.ts").write_text("export function render(): void;\n", encoding="utf-8")
        (out / f"{name}_bg.wasm").write_bytes(b"\x00asm\x01\x00\x00\x00")
        if self.mode is BuildMode.PRODUCTION:
            (out / f"{name}_bg.js").write_text(f"// {spec.package} {name} bindings\n", encoding="utf-8")
            files.insert(2, f"{name}_bg.js")

        manifest = {
            "name": spec.package,
            "version": "0.1.0",
            "files": files,
            "module" if self.mode is BuildMode.PRODUCTION else "main": f"{name}.js",
            "types": f"{name}.d.ts",
        }
        (out / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")

        return BuildResult(
            success=True,
            command=f"fake build {spec.package}",
            package=spec.package,
            output_name=name,
        )

    @property
    def built(self) -> list[tuple[str, str]]:
        """(package, output_name) pairs in call order."""
        return [(spec.package, spec.output_name) for spec in self.calls]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep WASMDIST_* variables of the host out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("WASMDIST_"):
            monkeypatch.delenv(key)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def project_root(temp_dir: Path) -> Path:
    """Create a project with the three package source directories.

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Path to the project root.
    """
    root = temp_dir / "project"
    for package in ("react", "react-noop", "react-dom"):
        (root / "packages" / package / "src").mkdir(parents=True)
        (root / "packages" / package / "Cargo.toml").write_text(
            f'[package]\nname = "{package}"\n', encoding="utf-8"
        )
    return root


@pytest.fixture
def production_config(project_root: Path) -> PipelineConfig:
    """Run configuration for PRODUCTION mode."""
    return PipelineConfig(mode=BuildMode.PRODUCTION, project_root=project_root)


@pytest.fixture
def node_config(project_root: Path) -> PipelineConfig:
    """Run configuration for TEST mode."""
    return PipelineConfig(mode=BuildMode.TEST, project_root=project_root)


@pytest.fixture
def production_builder() -> RecordingBuilder:
    """Fake builder producing PRODUCTION output."""
    return RecordingBuilder(BuildMode.PRODUCTION)


@pytest.fixture
def node_builder() -> RecordingBuilder:
    """Fake builder producing TEST output."""
    return RecordingBuilder(BuildMode.TEST)


@pytest.fixture
def builder_factory() -> type[RecordingBuilder]:
    """Return the fake builder class for tests that need custom failures."""
    return RecordingBuilder
