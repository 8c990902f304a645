"""Custom exception definitions for wasmdist."""

from typing import Any


class WasmDistError(Exception):
    """Base exception for all wasmdist errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ExternalToolError(WasmDistError):
    """Exception raised when the external compiler fails or cannot be launched."""

    def __init__(
        self,
        message: str,
        command: str | None = None,
        return_code: int | None = None,
        stderr: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize external tool error.

        Args:
            message: Error message.
            command: Command line that was executed.
            return_code: Exit code of the command (-1 if it never started).
            stderr: Captured standard error, truncated.
            details: Additional error details.
        """
        details = details or {}
        if command:
            details["command"] = command
        if return_code is not None:
            details["return_code"] = return_code
        if stderr:
            details["stderr"] = stderr[:1000]
        super().__init__(message, details)
        self.command = command
        self.return_code = return_code
        self.stderr = stderr


class OutputIOError(WasmDistError):
    """Exception raised when reading, writing or removing output files fails."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize output I/O error.

        Args:
            message: Error message.
            path: Filesystem path involved.
            details: Additional error details.
        """
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, details)
        self.path = path


class FormatError(WasmDistError):
    """Exception raised when a generated manifest cannot be parsed."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize format error.

        Args:
            message: Error message.
            path: Path of the offending document.
            details: Additional error details.
        """
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, details)
        self.path = path


class ConfigurationError(WasmDistError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
