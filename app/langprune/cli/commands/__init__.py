"""CLI commands for langprune.

This package contains all subcommand implementations.
"""

from langprune.cli.commands import config, prune, scan

__all__ = ["config", "prune", "scan"]
