"""Dispatcher linkage for renderer packages.

Renderers call into react's mutable dispatcher through `updateDispatcher`.
wasm-pack does not know about this cross-package import, so a linkage
statement is prepended to each renderer's entry file after the build.
"""

from pathlib import Path
from typing import AnyStr

from wasmdist.core.logger.logger import get_logger
from wasmdist.models.build import BuildMode, PipelineConfig
from wasmdist.pipeline.artifacts import read_artifact, write_artifact
from wasmdist.pipeline.topology import INDEX_NAME, REACT, REACT_DOM, REACT_NOOP

logger = get_logger(__name__)

REQUIRE_LINKAGE = f'const {{updateDispatcher}} = require("{REACT}");\n'
IMPORT_LINKAGE = f'import {{updateDispatcher}} from "{REACT}";\n'


def linkage_statement(mode: BuildMode) -> str:
    """Return the linkage statement for a build mode.

    TEST builds target node and load as CommonJS, production builds are
    ES modules.
    """
    return REQUIRE_LINKAGE if mode is BuildMode.TEST else IMPORT_LINKAGE


def prepend_linkage(content: AnyStr, mode: BuildMode) -> AnyStr:
    """Return content with the mode's linkage statement in front of it."""
    linkage = linkage_statement(mode)
    if isinstance(content, bytes):
        return linkage.encode("utf-8") + content
    return linkage + content


def entry_filename(mode: BuildMode) -> str:
    """Return the name of the renderer file that receives the linkage."""
    if mode is BuildMode.TEST:
        return f"{INDEX_NAME}.js"
    return f"{INDEX_NAME}_bg.js"


def shim_targets(mode: BuildMode) -> list[str]:
    """Return the packages that receive the linkage, in patch order."""
    if mode is BuildMode.TEST:
        return [REACT_NOOP, REACT_DOM]
    return [REACT_DOM]


def inject_shims(config: PipelineConfig) -> list[Path]:
    """Prepend the linkage statement to every renderer entry file.

    Args:
        config: Run configuration.

    Returns:
        Paths of the patched files, in patch order.

    Raises:
        OutputIOError: If an entry file cannot be read or written.
    """
    patched: list[Path] = []

    for package in shim_targets(config.mode):
        path = config.package_output(package) / entry_filename(config.mode)
        write_artifact(path, prepend_linkage(read_artifact(path), config.mode))
        logger.info(f"Linked {package} to {REACT}: {path}")
        patched.append(path)

    return patched
