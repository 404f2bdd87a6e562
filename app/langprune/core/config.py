"""Configuration file models and I/O.

The configuration describes where the installation lives and which
languages are always kept. It is stored as TOML and validated with
Pydantic; a missing file means "use the defaults".
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from langprune.core.paths import get_config_path
from langprune.languages.layout import (
    DEFAULT_CORE_DIR,
    DEFAULT_PLUGINS_DIR,
    DEFAULT_TEMPLATES_DIR,
    InstallationLayout,
)
from langprune.languages.reconciler import DEFAULT_LANG


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration content is invalid."""


def _validate_code(value: str) -> str:
    if not value:
        msg = "language code cannot be empty"
        raise ValueError(msg)
    if "," in value or "/" in value:
        msg = f"invalid language code '{value}'"
        raise ValueError(msg)
    return value


class InstallationConfig(BaseModel):
    """Installation section of the configuration.

    Attributes:
        root: Installation root directory.
        core_dir: Core directory, relative to root.
        templates_dir: Templates directory, relative to root.
        plugins_dir: Plugins directory, relative to root.
    """

    model_config = ConfigDict(extra="forbid")

    root: Annotated[Path, Field(description="Installation root directory")] = Path(".")
    core_dir: Annotated[str, Field(description="Core directory")] = DEFAULT_CORE_DIR
    templates_dir: Annotated[str, Field(description="Templates directory")] = DEFAULT_TEMPLATES_DIR
    plugins_dir: Annotated[str, Field(description="Plugins directory")] = DEFAULT_PLUGINS_DIR


class LanguagesConfig(BaseModel):
    """Languages section of the configuration.

    Attributes:
        fallback: Fallback language, always kept.
        active: Active UI language; detected from the installation if unset.
    """

    model_config = ConfigDict(extra="forbid")

    fallback: Annotated[str, Field(description="Fallback language")] = DEFAULT_LANG
    active: Annotated[str | None, Field(description="Active UI language")] = None

    @field_validator("fallback")
    @classmethod
    def validate_fallback(cls, v: str) -> str:
        """Validate the fallback language code."""
        return _validate_code(v)

    @field_validator("active")
    @classmethod
    def validate_active(cls, v: str | None) -> str | None:
        """Validate the active language code if given."""
        if v is None:
            return v
        return _validate_code(v)


class Config(BaseModel):
    """Complete langprune configuration."""

    model_config = ConfigDict(extra="forbid")

    installation: Annotated[
        InstallationConfig,
        Field(default_factory=InstallationConfig, description="Installation layout"),
    ]
    languages: Annotated[
        LanguagesConfig,
        Field(default_factory=LanguagesConfig, description="Language settings"),
    ]

    def layout(self, root: Path | None = None) -> InstallationLayout:
        """Build the installation layout, optionally for another root."""
        return InstallationLayout(
            (root or self.installation.root).expanduser(),
            core_dir=self.installation.core_dir,
            templates_dir=self.installation.templates_dir,
            plugins_dir=self.installation.plugins_dir,
        )


def load_config(path: Path | None = None) -> Config:
    """Load and validate the configuration.

    Args:
        path: Path to the configuration file. If None, uses the default path.

    Returns:
        Validated Config; defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return Config()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: Config, path: Path | None = None) -> Path:
    """Write the configuration to a TOML file atomically.

    Args:
        config: Configuration to save.
        path: Target path. If None, uses the default path.

    Returns:
        Path where the configuration was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(_config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: Config) -> dict[str, Any]:
    """Convert a Config to a dictionary suitable for TOML serialization.

    TOML has no null, so an unset active language is left out.
    """
    languages: dict[str, Any] = {"fallback": config.languages.fallback}
    if config.languages.active:
        languages["active"] = config.languages.active

    return {
        "installation": {
            "root": str(config.installation.root),
            "core_dir": config.installation.core_dir,
            "templates_dir": config.installation.templates_dir,
            "plugins_dir": config.installation.plugins_dir,
        },
        "languages": languages,
    }
