"""Manifest patching for the primary package.

wasm-pack only declares the files of the `index` artifact in the generated
package.json. The JSX dev runtime built alongside it has to be added by hand,
or consumers installing the package will not receive it.
"""

import json
import math
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from wasmdist.core.exceptions.errors import FormatError, OutputIOError
from wasmdist.core.logger.logger import get_logger
from wasmdist.models.build import PipelineConfig
from wasmdist.pipeline.topology import JSX_RUNTIME_NAME, MANIFEST_FILENAME, REACT

logger = get_logger(__name__)

JSX_RUNTIME_FILES: tuple[str, ...] = (
    f"{JSX_RUNTIME_NAME}.wasm",
    f"{JSX_RUNTIME_NAME}.js",
    f"{JSX_RUNTIME_NAME}_bg.js",
    f"{JSX_RUNTIME_NAME}_bg.wasm",
)


_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _parse_number(literal: str) -> int | float | None:
    # JavaScript has a single number type: 1.0 is written back as 1 and
    # out-of-range values as null.
    value = float(literal)
    if math.isinf(value):
        return None
    if value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def parse_manifest(text: str, path: Path | None = None) -> dict[str, Any]:
    """Parse manifest text.

    Raises:
        FormatError: If the text is not a JSON object.
    """
    location = str(path) if path else None
    try:
        document = json.loads(text, parse_float=_parse_number)
    except json.JSONDecodeError as e:
        raise FormatError(
            f"Manifest is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
            path=location,
        ) from e

    if not isinstance(document, dict):
        raise FormatError("Manifest must be a JSON object", path=location)
    return document


def serialize_manifest(document: dict[str, Any]) -> str:
    """Serialize a manifest in compact form, keeping key order.

    Non-ASCII text is kept as is. Unpaired surrogates, which JSON can carry
    as escapes but UTF-8 cannot encode, are written back as `\\uXXXX`.
    """
    text = json.dumps(document, separators=(",", ":"), ensure_ascii=False)
    return _LONE_SURROGATE.sub(lambda m: "\\u%04x" % ord(m.group()), text)


def append_manifest_files(
    document: dict[str, Any],
    files: Sequence[str] = JSX_RUNTIME_FILES,
) -> dict[str, Any]:
    """Append files to the manifest's `files` list.

    Entries are not deduplicated. Patching the same document twice
    declares every file twice.

    Raises:
        FormatError: If `files` is missing or is not a list.
    """
    declared = document.get("files")
    if not isinstance(declared, list):
        raise FormatError(f"Manifest 'files' must be a list, got {type(declared).__name__}")
    declared.extend(files)
    return document


def patch_manifest(path: Path, files: Sequence[str] = JSX_RUNTIME_FILES) -> dict[str, Any]:
    """Add files to a generated manifest and rewrite it in place.

    Args:
        path: Path to package.json.
        files: File names to declare.

    Returns:
        The patched manifest document.

    Raises:
        OutputIOError: If the manifest cannot be read or written.
        FormatError: If the manifest cannot be parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(f"Manifest is not UTF-8 text: {e.reason}", path=str(path)) from e
    except OSError as e:
        raise OutputIOError(
            f"Failed to read manifest: {path}",
            path=str(path),
            details={"error": str(e)},
        ) from e

    document = parse_manifest(text, path)
    try:
        append_manifest_files(document, files)
    except FormatError as e:
        raise FormatError(e.message, path=str(path)) from e

    data = serialize_manifest(document).encode("utf-8")
    try:
        path.write_bytes(data)
    except OSError as e:
        raise OutputIOError(
            f"Failed to write manifest: {path}",
            path=str(path),
            details={"error": str(e)},
        ) from e

    logger.info(f"Declared {len(files)} extra files in {path}")
    return document


def manifest_path(config: PipelineConfig) -> Path:
    """Return the path of the primary package's manifest."""
    return config.package_output(REACT) / MANIFEST_FILENAME
