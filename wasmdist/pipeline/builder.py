"""Package builder for running the external compiler.

This module provides:
- The ordered build plan for a build mode
- A wasm-pack backed builder
- Sequential execution that stops at the first failed build
"""

import shlex
import subprocess
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from wasmdist.core.exceptions.errors import ExternalToolError
from wasmdist.core.logger.logger import get_logger
from wasmdist.models.build import BuildMode, BuildResult, PackageBuildSpec, PipelineConfig
from wasmdist.pipeline.topology import (
    INDEX_NAME,
    JSX_RUNTIME_NAME,
    REACT,
    REACT_DOM,
    REACT_NOOP,
)

logger = get_logger(__name__)

ALL_MODES = frozenset({BuildMode.PRODUCTION, BuildMode.TEST})
TEST_ONLY = frozenset({BuildMode.TEST})


class PackageBuilder(ABC):
    """Builds one package artifact. Implementations must not raise on failure."""

    @abstractmethod
    def build(self, spec: PackageBuildSpec) -> BuildResult:
        """
        Build a single package artifact.

        Args:
            spec: What to build and where.

        Returns:
            BuildResult describing the invocation.
        """
        pass


class WasmPackBuilder(PackageBuilder):
    """Runs `wasm-pack build` synchronously for each spec."""

    def __init__(
        self,
        mode: BuildMode,
        compiler: str = "wasm-pack",
        cwd: Path | None = None,
    ):
        """Initialize the builder.

        Args:
            mode: Build mode, decides the --target flag.
            compiler: Compiler executable.
            cwd: Working directory for the compiler.
        """
        self.mode = mode
        self.compiler = compiler
        self.cwd = cwd

    def build_command(self, spec: PackageBuildSpec) -> list[str]:
        """Build the compiler argv for a spec."""
        cmd = [
            self.compiler,
            "build",
            str(spec.source_dir),
            "--out-dir",
            str(spec.output_dir),
            "--out-name",
            spec.output_name,
        ]
        if self.mode.target:
            cmd.extend(["--target", self.mode.target])
        return cmd

    def build(self, spec: PackageBuildSpec) -> BuildResult:
        cmd = self.build_command(spec)
        command = shlex.join(cmd)
        logger.info(f"Building {spec.package} ({spec.output_name}): {command}")

        start_time = time.time()
        try:
            completed = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            return BuildResult(
                success=False,
                return_code=-1,
                stderr=str(e),
                duration_seconds=time.time() - start_time,
                command=command,
                error_message=f"Failed to launch {self.compiler}: {e}",
                package=spec.package,
                output_name=spec.output_name,
            )

        duration = time.time() - start_time
        if completed.stdout:
            logger.debug(completed.stdout)
        if completed.stderr:
            logger.debug(completed.stderr)

        return BuildResult(
            success=completed.returncode == 0,
            return_code=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
            duration_seconds=duration,
            command=command,
            error_message=None if completed.returncode == 0 else completed.stderr[:1000],
            package=spec.package,
            output_name=spec.output_name,
        )


def default_build_specs(config: PipelineConfig) -> list[PackageBuildSpec]:
    """Return every build of the distribution, in execution order.

    The dev runtime is built before the main react artifact. Both land
    in the same output directory.
    """

    def spec(package: str, output_name: str, modes: frozenset[BuildMode]) -> PackageBuildSpec:
        return PackageBuildSpec(
            package=package,
            source_dir=config.package_source(package),
            output_dir=config.package_output(package),
            output_name=output_name,
            include_in_modes=modes,
        )

    return [
        spec(REACT, JSX_RUNTIME_NAME, ALL_MODES),
        spec(REACT, INDEX_NAME, ALL_MODES),
        spec(REACT_NOOP, INDEX_NAME, TEST_ONLY),
        spec(REACT_DOM, INDEX_NAME, ALL_MODES),
    ]


def plan_builds(config: PipelineConfig) -> list[PackageBuildSpec]:
    """Return the builds that run in the configured mode, in order."""
    return [s for s in default_build_specs(config) if s.applies_to(config.mode)]


def run_builds(builder: PackageBuilder, specs: Iterable[PackageBuildSpec]) -> list[BuildResult]:
    """Run builds in order, stopping at the first failure.

    Args:
        builder: Builder used for every spec.
        specs: Builds to run.

    Returns:
        Results of all builds, all successful.

    Raises:
        ExternalToolError: On the first failed build.
    """
    results: list[BuildResult] = []

    for spec in specs:
        result = builder.build(spec)
        if not result.success:
            raise ExternalToolError(
                f"Build of {spec.package} ({spec.output_name}) failed",
                command=result.command,
                return_code=result.return_code,
                stderr=result.stderr or result.error_message,
            )

        logger.info(
            f"Built {spec.package} ({spec.output_name}) in {result.duration_seconds:.1f}s"
        )
        results.append(result)

    return results
