"""Logging system with Rich support."""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from wasmdist.core.config.settings import LoggingSettings
from wasmdist.core.exceptions.errors import ConfigurationError

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _console_handler(settings: LoggingSettings) -> logging.Handler:
    if settings.use_rich:
        # Compiler output can contain brackets, so markup stays off.
        return RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(settings.format))
    return handler


def _file_handler(settings: LoggingSettings) -> logging.Handler:
    """Open the configured log file.

    Raises:
        ConfigurationError: If the file or its directory cannot be created.
    """
    log_file = settings.file
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot open log file: {log_file}",
            config_key="logging.file",
            details={"error": str(e)},
        ) from e

    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logging(settings: LoggingSettings) -> None:
    """Route all wasmdist logging through the configured handlers.

    Existing root handlers are replaced, so calling this twice is safe.

    Args:
        settings: Logging settings of the run.

    Raises:
        ConfigurationError: If the log file cannot be opened.
    """
    level = getattr(logging, settings.level)

    # Open the file first so a bad path leaves the current handlers alone.
    handlers = [_console_handler(settings)]
    if settings.file:
        handlers.append(_file_handler(settings))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger by name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]
