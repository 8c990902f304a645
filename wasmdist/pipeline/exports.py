"""Supplemental exports for the JSX dev runtime."""

from pathlib import Path
from typing import AnyStr

from wasmdist.core.logger.logger import get_logger
from wasmdist.models.build import PipelineConfig
from wasmdist.pipeline.artifacts import read_artifact, write_artifact
from wasmdist.pipeline.topology import JSX_RUNTIME_NAME, REACT

logger = get_logger(__name__)

FRAGMENT_EXPORT = "export const Fragment='react.fragment';\n"
FRAGMENT_DECLARATION = "export const Fragment: string;\n"


def _append(content: AnyStr, text: str) -> AnyStr:
    if isinstance(content, bytes):
        return content + text.encode("utf-8")
    return content + text


def append_export(content: AnyStr) -> AnyStr:
    """Append the Fragment export to runtime source."""
    return _append(content, FRAGMENT_EXPORT)


def append_export_declaration(content: AnyStr) -> AnyStr:
    """Append the Fragment type declaration to a .d.ts file."""
    return _append(content, FRAGMENT_DECLARATION)


def augment_exports(config: PipelineConfig) -> list[Path]:
    """Add the Fragment constant to the generated dev runtime.

    The JSX transform imports Fragment from the dev runtime, but it is not
    exported by the compiled crate.

    Args:
        config: Run configuration.

    Returns:
        Paths of the runtime file and its declaration file.

    Raises:
        OutputIOError: If either file cannot be read or written.
    """
    package_dir = config.package_output(REACT)
    runtime_path = package_dir / f"{JSX_RUNTIME_NAME}.js"
    declaration_path = package_dir / f"{JSX_RUNTIME_NAME}.d.ts"

    write_artifact(runtime_path, append_export(read_artifact(runtime_path)))
    write_artifact(declaration_path, append_export_declaration(read_artifact(declaration_path)))

    logger.info(f"Added Fragment export to {runtime_path}")
    return [runtime_path, declaration_path]
