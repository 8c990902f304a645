"""
Build Pipeline

Runs the whole distribution build: reset, compile, patch.
"""

from collections.abc import Callable

from wasmdist.core.exceptions.errors import OutputIOError, WasmDistError
from wasmdist.core.logger.logger import get_logger
from wasmdist.models.build import PipelineConfig, PipelineReport, PipelineStage
from wasmdist.pipeline.builder import PackageBuilder, WasmPackBuilder, plan_builds, run_builds
from wasmdist.pipeline.exports import augment_exports
from wasmdist.pipeline.manifest import manifest_path, patch_manifest
from wasmdist.pipeline.shim import inject_shims
from wasmdist.pipeline.workspace import OutputWorkspace


class BuildPipeline:
    """
    Sequences one distribution build.

    The pipeline:
    1. Removes the previous output root
    2. Builds every package planned for the mode, in order
    3. Declares the JSX dev runtime in react's manifest
    4. Links the renderers to react's dispatcher
    5. Adds the Fragment export to the dev runtime

    The first error ends the run. Nothing is rolled back; the next run's
    reset clears whatever was left behind.
    """

    def __init__(
        self,
        config: PipelineConfig,
        builder: PackageBuilder | None = None,
        workspace: OutputWorkspace | None = None,
        on_stage: Callable[[PipelineStage], None] | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Run configuration.
            builder: Package builder. Defaults to wasm-pack.
            workspace: Output workspace. Defaults to the configured output root.
            on_stage: Callback invoked after each stage transition.
        """
        self.config = config
        self.builder = builder or WasmPackBuilder(
            mode=config.mode,
            compiler=config.compiler,
            cwd=config.project_root,
        )
        self.workspace = workspace or OutputWorkspace(config.output_path)
        self.on_stage = on_stage
        self.logger = get_logger(__name__)
        self._report: PipelineReport | None = None

    @property
    def report(self) -> PipelineReport | None:
        """Report of the latest run."""
        return self._report

    def _enter(self, stage: PipelineStage) -> None:
        self._report.mark_stage(stage)
        if self.on_stage:
            self.on_stage(stage)

    def run(self) -> PipelineReport:
        """
        Execute every stage.

        Returns:
            Report of the completed run.

        Raises:
            WasmDistError: Any failure; the report is left in FAILED.
        """
        report = PipelineReport(mode=self.config.mode)
        self._report = report
        self.logger.info(
            f"Building distribution in {self.config.mode.value} mode "
            f"into {self.config.output_path}"
        )

        try:
            self.workspace.reset()
            self._enter(PipelineStage.WORKSPACE_RESET)

            for spec in plan_builds(self.config):
                self._enter(PipelineStage.BUILDING)
                report.build_results.extend(run_builds(self.builder, [spec]))

            path = manifest_path(self.config)
            patch_manifest(path)
            report.patched_files.append(path)
            self._enter(PipelineStage.MANIFEST_PATCHED)

            report.patched_files.extend(inject_shims(self.config))
            self._enter(PipelineStage.SHIM_INJECTED)

            report.patched_files.extend(augment_exports(self.config))
            self._enter(PipelineStage.EXPORT_AUGMENTED)
        except WasmDistError as e:
            self._fail(e)
            raise
        except OSError as e:
            error = OutputIOError(
                f"Filesystem error: {e}",
                path=str(e.filename) if e.filename else None,
            )
            self._fail(error)
            raise error from e

        self._enter(PipelineStage.DONE)
        self.logger.info(
            f"Distribution built: {len(report.build_results)} builds, "
            f"{len(report.patched_files)} files patched in {report.duration_seconds:.1f}s"
        )
        return report

    def _fail(self, error: WasmDistError) -> None:
        failed_at = self._report.stage
        self._report.mark_failed(error)
        if self.on_stage:
            self.on_stage(PipelineStage.FAILED)
        self.logger.error(f"Pipeline failed after {failed_at.value}: {error}")


def build_distribution(
    config: PipelineConfig,
    builder: PackageBuilder | None = None,
) -> PipelineReport:
    """Convenience function to run the full pipeline.

    Args:
        config: Run configuration.
        builder: Package builder. Defaults to wasm-pack.

    Returns:
        Report of the completed run.
    """
    return BuildPipeline(config, builder=builder).run()
