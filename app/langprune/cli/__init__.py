"""CLI package for langprune.

This package contains the Typer application and all subcommands.
"""

from langprune.cli.main import app

__all__ = ["app"]
