"""Configuration management for wasmdist."""

from wasmdist.core.config.loader import DEFAULT_CONFIG_FILENAME, ConfigLoader
from wasmdist.core.config.settings import BuildSettings, LoggingSettings, Settings

__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "ConfigLoader",
    "BuildSettings",
    "LoggingSettings",
    "Settings",
]
