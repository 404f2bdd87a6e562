"""Scan command implementation.

Lists the languages available for every module of the installation.
Nothing is proposed for deletion: every language is shown as kept.
"""

import json
from typing import Annotated

import typer
from rich.markup import escape

from langprune.cli.display import create_inventory_tree, format_language_list, inventory_to_dict
from langprune.cli.types import (
    OutputFormat,
    require_config,
    require_layout,
    resolve_always_kept,
    scan_installation,
)
from langprune.languages.reconciler import reconcile
from langprune.utils.formatting import console, print_info

app = typer.Typer(
    help="List the languages installed for each module.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan_languages(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the languages available for the core, templates and plugins."""
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(ctx)
    layout = require_layout(ctx, config)
    always = resolve_always_kept(config, layout)

    inventory = scan_installation(layout)
    result = reconcile(inventory, always, keep_text=None, selected=None, first_run=True)

    if output_format == OutputFormat.JSON:
        data = {
            "languages": list(result.all_languages),
            "keep": list(result.keep_set),
            "inventory": inventory_to_dict(inventory),
        }
        console.print_json(json.dumps(data))
        return

    if inventory.is_empty():
        print_info(f"No language directories found below {escape(str(layout.root))}")
        return

    active = always[-1]
    console.print(f"Active language: [active]{escape(active)}[/active]")
    languages = format_language_list(result.all_languages, result.selected, active)
    console.print(f"Available languages: {languages}")
    console.print(create_inventory_tree(inventory, None, active))
    console.print(
        f"\n[dim]Found {len(result.all_languages)} language(s) in "
        f"{inventory.count()} directories[/dim]"
    )
