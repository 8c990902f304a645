"""Configuration loader for YAML files."""

from pathlib import Path
from typing import Any

import yaml

from wasmdist.core.exceptions.errors import ConfigurationError

DEFAULT_CONFIG_FILENAME = "wasmdist.yaml"


class ConfigLoader:
    """Load build configuration from a YAML file."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize the config loader.

        Args:
            config_path: Path to configuration file.
        """
        self.config_path = config_path
        self._config: dict[str, Any] = {}

    def load(self, path: Path | None = None) -> dict[str, Any]:
        """Load configuration from a YAML file.

        Args:
            path: Path to YAML file. Uses config_path if not provided.

        Returns:
            Loaded configuration dictionary.

        Raises:
            ConfigurationError: If file cannot be loaded or is not a mapping.
        """
        load_path = path or self.config_path
        if not load_path:
            return {}

        try:
            with open(load_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Configuration file not found: {load_path}",
                config_key=str(load_path),
                details={"path": str(load_path)},
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {load_path}",
                config_key=str(load_path),
                details={"error": str(e)},
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {load_path}",
                config_key=str(load_path),
            )

        self._config = data
        return self._config

    def get_section(self, section: str) -> dict[str, Any]:
        """Get an entire configuration section.

        Args:
            section: Section name.

        Returns:
            Configuration section dictionary.
        """
        result = self._config.get(section, {})
        return result if isinstance(result, dict) else {}

    @staticmethod
    def find_default(directory: Path | None = None) -> Path | None:
        """Locate the default configuration file in a directory.

        Args:
            directory: Directory to search. Defaults to the working directory.

        Returns:
            Path to wasmdist.yaml if present, None otherwise.
        """
        candidate = (directory or Path.cwd()) / DEFAULT_CONFIG_FILENAME
        return candidate if candidate.is_file() else None
