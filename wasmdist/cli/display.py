"""Display components for CLI using Rich."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from wasmdist.models.build import BuildMode, PackageBuildSpec, PipelineReport

console = Console()


def show_success(title: str, message: str) -> None:
    """Display a success message."""
    console.print()
    console.print(
        Panel(
            f"[bold green]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="green",
        )
    )


def show_error(title: str, message: str) -> None:
    """Display an error message."""
    console.print()
    console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="red",
        )
    )


def show_plan(mode: BuildMode, specs: list[PackageBuildSpec], commands: list[str]) -> None:
    """Display the ordered build plan for a mode.

    Args:
        mode: Build mode the plan was made for.
        specs: Planned builds, in order.
        commands: Compiler command line of each build.
    """
    console.print()
    console.print(f"[bold]Build Plan ({mode.value})[/]")

    # Commands are printed unwrapped so they can be copied.
    for index, (spec, command) in enumerate(zip(specs, commands), start=1):
        console.print(
            f"[dim]{index}.[/] [cyan]{spec.package}[/] ({spec.output_name})\n"
            f"   [dim]{escape(command)}[/]",
            soft_wrap=True,
        )


def show_build_report(report: PipelineReport) -> None:
    """Display the builds and patched files of a finished run.

    Args:
        report: Report returned by the pipeline.
    """
    console.print()

    builds = Table(title="[bold]Builds[/]", show_header=True)
    builds.add_column("Package", style="cyan")
    builds.add_column("Out Name", style="white")
    builds.add_column("Status")
    builds.add_column("Duration", justify="right")

    for result in report.build_results:
        status = "[bold green]OK[/]" if result.success else f"[bold red]EXIT {result.return_code}[/]"
        builds.add_row(
            result.package or "N/A",
            result.output_name or "N/A",
            status,
            f"{result.duration_seconds:.1f}s",
        )

    console.print(builds)

    if report.patched_files:
        patched = Table(title="[bold]Patched Files[/]", show_header=False, box=None)
        patched.add_column("Path", style="white")
        for path in report.patched_files:
            patched.add_row(escape(str(path)))
        console.print(patched)
