"""Config command implementation.

Shows the effective configuration and writes a default config file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from langprune.cli.types import get_cli_options, require_config
from langprune.core.config import Config, ConfigError, InstallationConfig, save_config
from langprune.core.paths import get_config_path
from langprune.languages.layout import detect_active_language
from langprune.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the langprune configuration.",
    no_args_is_help=True,
)


def _config_path(ctx: typer.Context) -> Path:
    return get_cli_options(ctx).get("config_path") or get_config_path()


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    config = require_config(ctx)
    path = _config_path(ctx)
    root = (get_cli_options(ctx).get("root") or config.installation.root).expanduser()

    active = config.languages.active
    active_source = "config"
    if active is None:
        active = detect_active_language(root)
        active_source = "detected" if active else "fallback"

    table = Table(title="Configuration", show_header=True, header_style="bold_header")
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    location = escape(str(path))
    if not path.exists():
        location += " [muted](not found)[/muted]"
    table.add_row("Config file", location)
    table.add_row("Installation root", escape(str(root)))
    table.add_row("Core directory", escape(config.installation.core_dir))
    table.add_row("Templates directory", escape(config.installation.templates_dir))
    table.add_row("Plugins directory", escape(config.installation.plugins_dir))
    table.add_row("Fallback language", escape(config.languages.fallback))
    table.add_row(
        "Active language",
        f"{escape(active or config.languages.fallback)} [muted]({active_source})[/muted]",
    )

    console.print(table)


@app.command()
def init(
    ctx: typer.Context,
    root: Annotated[
        Path | None,
        typer.Option("--root", "-r", help="Installation root to store in the config."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a default configuration file."""
    path = _config_path(ctx)

    if path.exists() and not force:
        print_error(f"Config already exists: {escape(str(path))}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    config = Config(installation=InstallationConfig(root=(root or Path.cwd()).resolve()))

    try:
        saved = save_config(config, path)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {escape(str(saved))}")
