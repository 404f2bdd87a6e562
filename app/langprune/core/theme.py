"""Color theme for langprune output.

Colors come from the bundled ``data/theme.toml``, optionally overridden
color by color from the user's ``theme.toml`` in the config directory.
"""

import logging
import re
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from langprune.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")

# Text attributes added on top of a color when building Rich styles
_STYLE_ATTRIBUTES: dict[str, str] = {
    "error": "bold",
    "removed": "strike",
    "active": "bold underline",
    "module": "bold",
}


def _check_hex(name: str, value: object) -> str:
    if not isinstance(value, str):
        msg = f"{name}: color must be a string"
        raise ValueError(msg)
    color = value.strip()
    if not color.startswith("#"):
        msg = f"{name}: color must start with '#'"
        raise ValueError(msg)
    digits = color[1:]
    if len(digits) not in (3, 6):
        msg = f"{name}: color must be #RGB or #RRGGBB format"
        raise ValueError(msg)
    if not _HEX_DIGITS.fullmatch(digits):
        msg = f"{name}: invalid hex color '{color}'"
        raise ValueError(msg)
    return color


class ThemeColors(BaseModel):
    """Colors used by the CLI, as #RGB or #RRGGBB hex codes."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Language states in inventory trees
    kept: str = "#c1ff62"
    removed: str = "#f53263"
    active: str = "#0e8ac8"
    module: str = "#69B9A1"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Validate that every color is a hex code."""
        return _check_hex(info.field_name, v)


def get_bundled_theme_path() -> Path:
    """Return the path of the theme shipped with the package."""
    return resources.files("langprune.data").joinpath("theme.toml")  # type: ignore[return-value]


def _read_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string values are ignored.

    Args:
        path: Theme file to read.

    Returns:
        Color names mapped to their values, or None if the file is
        missing or unusable.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None
    except OSError as e:
        logger.warning("Cannot read theme file %s: %s", path, e)
        return None

    table = data.get("colors", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return None
    return {str(key): value for key, value in table.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Load the bundled colors merged with the user's overrides.

    An invalid user theme is reported and replaced by the defaults.
    """
    colors = _read_colors(Path(get_bundled_theme_path()))
    if colors is None:
        logger.error("Bundled theme is missing; using built-in colors")
        colors = {}

    user_path = get_user_theme_path()
    overrides = _read_colors(user_path)
    if overrides:
        logger.debug("Applying %d color override(s) from %s", len(overrides), user_path)
        colors = {**colors, **overrides}

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a set of colors.

    Every color becomes a style of the same name. Removed languages are
    struck through and the active language is underlined.

    Args:
        colors: Colors to use. If None, the theme files are loaded.

    Returns:
        Rich Theme with one style per color plus convenience aliases.
    """
    if colors is None:
        colors = load_theme()

    styles: dict[str, str] = {}
    for name, color in colors.model_dump().items():
        attributes = _STYLE_ATTRIBUTES.get(name)
        styles[name] = f"{attributes} {color}" if attributes else color

    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
