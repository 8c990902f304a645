"""Application settings using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wasmdist.core.config.loader import ConfigLoader
from wasmdist.core.exceptions.errors import ConfigurationError


class BuildSettings(BaseSettings):
    """Build layout and toolchain settings."""

    model_config = SettingsConfigDict(
        env_prefix="WASMDIST_BUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    output_root: Path = Field(
        default=Path("dist"),
        description="Output root, relative to the project root",
    )
    packages_dir: Path = Field(
        default=Path("packages"),
        description="Directory holding the package sources",
    )
    compiler: str = Field(
        default="wasm-pack",
        min_length=1,
        description="External compiler executable",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="WASMDIST_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        if v is None or v == "":
            return None
        return Path(v)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="WASMDIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    build: BuildSettings = Field(default_factory=BuildSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.

        Raises:
            ConfigurationError: If the file cannot be loaded or holds invalid values.
        """
        loader = ConfigLoader(path)
        loader.load()

        try:
            return cls(
                build=BuildSettings(**loader.get_section("build")),
                logging=LoggingSettings(**loader.get_section("logging")),
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid settings in configuration file: {path}",
                config_key=str(path),
                details={"errors": e.errors(include_url=False)},
            ) from e

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from an explicit file or default locations.

        Values present in the YAML file win over environment variables,
        which win over .env and the field defaults.

        Args:
            path: Explicit YAML file. Searched in the working directory if None.

        Returns:
            Settings instance.
        """
        config_path = path or ConfigLoader.find_default()
        if config_path is not None:
            return cls.from_yaml(config_path)

        # Environment variables and .env are automatically loaded by pydantic-settings
        try:
            return cls()
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid settings in environment",
                details={"errors": e.errors(include_url=False)},
            ) from e
