"""Build-related data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from wasmdist.core.config.settings import BuildSettings

NODEJS_TARGET = "nodejs"


class BuildMode(str, Enum):
    """Build mode enumeration."""

    PRODUCTION = "production"
    TEST = "test"

    @classmethod
    def from_flag(cls, test: bool) -> "BuildMode":
        """Select the mode from the presence of the test flag."""
        return cls.TEST if test else cls.PRODUCTION

    @property
    def target(self) -> str | None:
        """Alternate compilation target passed to the compiler, if any."""
        return NODEJS_TARGET if self is BuildMode.TEST else None


class PipelineStage(str, Enum):
    """Stages of a pipeline run, in execution order."""

    INIT = "init"
    WORKSPACE_RESET = "workspace_reset"
    BUILDING = "building"
    MANIFEST_PATCHED = "manifest_patched"
    SHIM_INJECTED = "shim_injected"
    EXPORT_AUGMENTED = "export_augmented"
    DONE = "done"
    FAILED = "failed"


class PackageBuildSpec(BaseModel):
    """One compiler invocation: a package built under a given output name."""

    package: str = Field(description="Package name, also its output subdirectory")
    source_dir: Path = Field(description="Package source location")
    output_dir: Path = Field(description="Destination output directory")
    output_name: str = Field(description="Output base name passed to the compiler")
    include_in_modes: frozenset[BuildMode] = Field(
        default=frozenset({BuildMode.PRODUCTION, BuildMode.TEST}),
        description="Modes in which this build runs",
    )

    model_config = {"frozen": True}

    def applies_to(self, mode: BuildMode) -> bool:
        """Return True if this build runs in the given mode."""
        return mode in self.include_in_modes


@dataclass
class BuildResult:
    """Result of a single compiler invocation.

    Attributes:
        success: Whether the build succeeded.
        return_code: Exit code of the build command.
        stdout: Standard output from the build.
        stderr: Standard error from the build.
        duration_seconds: Time taken for the build.
        command: The command that was executed.
        error_message: Error message if build failed.
        package: Package that was built.
        output_name: Output base name of the artifact.
    """

    success: bool
    return_code: int = 0
    stdout: str = ""
    stderr: str = ""
    duration_seconds: float = 0.0
    command: str | None = None
    error_message: str | None = None
    package: str | None = None
    output_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "success": self.success,
            "return_code": self.return_code,
            "duration_seconds": self.duration_seconds,
            "command": self.command,
            "error_message": self.error_message,
            "package": self.package,
            "output_name": self.output_name,
        }


class PipelineConfig(BaseModel):
    """Run configuration, built once at the process boundary and passed down."""

    mode: BuildMode = Field(default=BuildMode.PRODUCTION, description="Active build mode")
    project_root: Path = Field(description="Directory the build runs from")
    output_root: Path = Field(default=Path("dist"), description="Output root")
    packages_dir: Path = Field(default=Path("packages"), description="Package sources")
    compiler: str = Field(default="wasm-pack", description="External compiler executable")

    model_config = {"frozen": True}

    @classmethod
    def from_settings(
        cls,
        settings: BuildSettings,
        mode: BuildMode,
        project_root: Path | None = None,
    ) -> "PipelineConfig":
        """Create a run configuration from build settings.

        Args:
            settings: Build settings (layout and compiler).
            mode: Build mode selected on the command line.
            project_root: Project root. Defaults to the working directory.

        Returns:
            PipelineConfig instance.
        """
        return cls(
            mode=mode,
            project_root=(project_root or Path.cwd()).resolve(),
            output_root=settings.output_root,
            packages_dir=settings.packages_dir,
            compiler=settings.compiler,
        )

    @property
    def output_path(self) -> Path:
        """Absolute output root."""
        return self.project_root / self.output_root

    def package_output(self, package: str) -> Path:
        """Absolute output directory of a package."""
        return self.output_path / package

    def package_source(self, package: str) -> Path:
        """Absolute source directory of a package."""
        return self.project_root / self.packages_dir / package


class PipelineReport(BaseModel):
    """Progress and outcome of a pipeline run."""

    mode: BuildMode = Field(description="Build mode of the run")
    stage: PipelineStage = Field(default=PipelineStage.INIT, description="Current stage")
    stages: list[PipelineStage] = Field(
        default_factory=lambda: [PipelineStage.INIT],
        description="Stages entered, in order",
    )
    build_results: list[BuildResult] = Field(default_factory=list)
    patched_files: list[Path] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = None
    error_message: str | None = None

    model_config = {
        "arbitrary_types_allowed": True,
        "use_enum_values": False,
    }

    @property
    def succeeded(self) -> bool:
        """Return True once the run reached DONE."""
        return self.stage == PipelineStage.DONE

    @property
    def duration_seconds(self) -> float:
        """Wall time of the run so far."""
        end = self.finished_at or datetime.now()
        return (end - self.started_at).total_seconds()

    def mark_stage(self, stage: PipelineStage) -> None:
        """Record a transition to a new stage. FAILED is terminal."""
        if self.stage == PipelineStage.FAILED:
            return
        self.stage = stage
        self.stages.append(stage)
        if stage in (PipelineStage.DONE, PipelineStage.FAILED):
            self.finished_at = datetime.now()

    def mark_failed(self, error: BaseException) -> None:
        """Move the run to FAILED and keep the error message."""
        self.error_message = str(error)
        self.mark_stage(PipelineStage.FAILED)
