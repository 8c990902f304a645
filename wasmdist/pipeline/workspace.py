"""Output workspace management."""

import shutil
from pathlib import Path

from wasmdist.core.exceptions.errors import OutputIOError
from wasmdist.core.logger.logger import get_logger

logger = get_logger(__name__)


class OutputWorkspace:
    """The output root that every run rebuilds from scratch."""

    def __init__(self, root: Path) -> None:
        """Initialize the workspace.

        Args:
            root: Output root directory.
        """
        self.root = root

    def reset(self) -> None:
        """Remove the output root and everything under it.

        A missing root is not an error.

        Raises:
            OutputIOError: If the root exists but cannot be removed.
        """
        try:
            if self.root.is_symlink() or self.root.is_file():
                self.root.unlink()
            else:
                shutil.rmtree(self.root)
        except FileNotFoundError:
            logger.debug(f"Output root does not exist, nothing to remove: {self.root}")
            return
        except OSError as e:
            raise OutputIOError(
                f"Failed to remove output root: {self.root}",
                path=str(self.root),
                details={"error": str(e)},
            ) from e

        logger.info(f"Removed output root: {self.root}")
