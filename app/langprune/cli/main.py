"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from langprune import __version__
from langprune.cli.commands import config, prune, scan
from langprune.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="langprune",
    help="Remove unused translations from a wiki installation.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"langprune version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through Rich on stderr.

    Verbose mode shows every deletion and skipped module; otherwise only
    problems reading the installation are reported.
    """
    logger = logging.getLogger("langprune")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=err_console, show_path=False, markup=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to the config file.",
        ),
    ] = None,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Installation root directory (overrides the config).",
        ),
    ] = None,
) -> None:
    """langprune - remove unused translations from a wiki installation.

    Lists the language directories of the core, every template and every
    plugin, and deletes those outside the languages you keep.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path
    ctx.obj["root"] = root


# Register commands
app.add_typer(scan.app, name="scan")
app.add_typer(prune.app, name="prune")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
