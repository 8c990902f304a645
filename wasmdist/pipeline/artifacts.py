"""Byte-level access to generated artifacts."""

from pathlib import Path

from wasmdist.core.exceptions.errors import OutputIOError


def read_artifact(path: Path) -> bytes:
    """Read a generated file.

    Raises:
        OutputIOError: If the file cannot be read.
    """
    try:
        return path.read_bytes()
    except OSError as e:
        raise OutputIOError(
            f"Failed to read generated file: {path}",
            path=str(path),
            details={"error": str(e)},
        ) from e


def write_artifact(path: Path, data: bytes) -> None:
    """Overwrite a generated file.

    Raises:
        OutputIOError: If the file cannot be written.
    """
    try:
        path.write_bytes(data)
    except OSError as e:
        raise OutputIOError(
            f"Failed to write generated file: {path}",
            path=str(path),
            details={"error": str(e)},
        ) from e
