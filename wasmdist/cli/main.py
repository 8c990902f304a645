"""Main CLI entry point for wasmdist."""

import shlex
import sys
from pathlib import Path

import click
from rich.markup import escape

from wasmdist.cli.display import console, show_build_report, show_error, show_plan, show_success
from wasmdist.core.config.settings import Settings
from wasmdist.core.exceptions.errors import WasmDistError
from wasmdist.core.logger.logger import setup_logging
from wasmdist.models.build import BuildMode, PipelineConfig
from wasmdist.pipeline.builder import WasmPackBuilder, plan_builds
from wasmdist.pipeline.orchestrator import BuildPipeline

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file (default: ./wasmdist.yaml if present)",
)
project_root_option = click.option(
    "--project-root",
    "-C",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root to build from (default: current directory)",
)
test_option = click.option(
    "--test",
    is_flag=True,
    help="Build for the test runner (nodejs target, includes react-noop)",
)


def load_pipeline_config(
    config_path: Path | None,
    test: bool,
    project_root: Path | None,
) -> PipelineConfig:
    """Build the run configuration from CLI options.

    Args:
        config_path: Explicit YAML configuration file.
        test: Whether the test flag was given.
        project_root: Project root override.

    Returns:
        PipelineConfig for this invocation.
    """
    settings = Settings.load(config_path)
    setup_logging(settings.logging)
    return PipelineConfig.from_settings(
        settings.build,
        mode=BuildMode.from_flag(test),
        project_root=project_root,
    )


@click.group(invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def main(ctx: click.Context, version: bool) -> None:
    """wasmdist - build and patch the wasm package distribution."""
    if version:
        from wasmdist import __version__

        click.echo(f"wasmdist version {__version__}")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@test_option
@config_option
@project_root_option
def build(test: bool, config_path: Path | None, project_root: Path | None) -> None:
    """Reset the output root, build every package and patch the output."""
    try:
        config = load_pipeline_config(config_path, test, project_root)
        report = BuildPipeline(config).run()
    except WasmDistError as e:
        show_error("Build Failed", str(e))
        sys.exit(1)

    show_build_report(report)
    show_success(
        "Build Complete",
        f"{config.mode.value} distribution written to {config.output_path}",
    )


@main.command()
@test_option
@config_option
@project_root_option
def plan(test: bool, config_path: Path | None, project_root: Path | None) -> None:
    """Show the builds that would run, without running them."""
    try:
        config = load_pipeline_config(config_path, test, project_root)
    except WasmDistError as e:
        show_error("Invalid Configuration", str(e))
        sys.exit(1)

    builder = WasmPackBuilder(mode=config.mode, compiler=config.compiler, cwd=config.project_root)
    specs = plan_builds(config)
    commands = [shlex.join(builder.build_command(spec)) for spec in specs]

    show_plan(config.mode, specs, commands)
    console.print(f"[dim]Output root: {escape(str(config.output_path))}[/]")


if __name__ == "__main__":
    main()
