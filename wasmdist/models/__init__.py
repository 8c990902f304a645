"""Data models module."""

from wasmdist.models.build import (
    NODEJS_TARGET,
    BuildMode,
    BuildResult,
    PackageBuildSpec,
    PipelineConfig,
    PipelineReport,
    PipelineStage,
)

__all__ = [
    "NODEJS_TARGET",
    "BuildMode",
    "BuildResult",
    "PackageBuildSpec",
    "PipelineConfig",
    "PipelineReport",
    "PipelineStage",
]
