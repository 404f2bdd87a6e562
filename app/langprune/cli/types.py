"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path
from typing import Any

import typer
from rich.markup import escape

from langprune.core.config import Config, ConfigError, load_config
from langprune.languages.errors import LayoutError
from langprune.languages.layout import InstallationLayout, detect_active_language
from langprune.languages.models import ModuleInventory
from langprune.languages.reconciler import always_kept
from langprune.languages.scanner import build_inventory
from langprune.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_cli_options(ctx: typer.Context) -> dict[str, Any]:
    """Return the global options stored on the root context."""
    obj = ctx.find_root().obj
    return obj if isinstance(obj, dict) else {}


def require_config(ctx: typer.Context) -> Config:
    """Load the configuration or exit with an error message.

    Args:
        ctx: Typer context carrying the global ``--config`` option.

    Returns:
        Loaded configuration (defaults if no file exists).

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    path: Path | None = get_cli_options(ctx).get("config_path")
    try:
        return load_config(path)
    except ConfigError as e:
        print_error(f"Failed to load config: {escape(str(e))}")
        raise typer.Exit(code=1) from e


def require_layout(ctx: typer.Context, config: Config) -> InstallationLayout:
    """Build the installation layout or exit if the root is unusable.

    The global ``--root`` option overrides the configured root.

    Raises:
        typer.Exit: If the installation root is not a directory.
    """
    layout = config.layout(get_cli_options(ctx).get("root"))
    try:
        layout.validate()
    except LayoutError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e
    return layout


def resolve_always_kept(
    config: Config,
    layout: InstallationLayout,
    active_override: str | None = None,
) -> tuple[str, ...]:
    """Return the fallback and active language of an installation.

    The active language is taken from the command line, then the
    configuration, then the installation's own settings.
    """
    active = active_override or config.languages.active or detect_active_language(layout.root)
    return always_kept(active, config.languages.fallback)


def scan_installation(layout: InstallationLayout) -> ModuleInventory:
    """Build the inventory of every module registered in a layout."""
    return build_inventory(layout.template_names(), layout.plugin_names(), layout)
