"""Prune command implementation.

Works out which language directories fall outside the languages to keep
and either previews them (the default) or deletes them.
"""

import json
from typing import Annotated

import typer
from rich.markup import escape

from langprune.cli.display import (
    create_inventory_tree,
    create_results_table,
    format_language_list,
    inventory_to_dict,
    print_results_summary,
)
from langprune.cli.types import (
    OutputFormat,
    require_config,
    require_layout,
    resolve_always_kept,
    scan_installation,
)
from langprune.languages.errors import InvalidRequestError
from langprune.languages.filter import filter_inventory
from langprune.languages.models import ModuleInventory, Reconciliation, RemovalResult
from langprune.languages.reconciler import reconcile
from langprune.languages.remover import LanguageRemover
from langprune.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Remove the languages that are not kept.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def prune_languages(
    ctx: typer.Context,
    keep: Annotated[
        str | None,
        typer.Option(
            "--keep",
            "-k",
            help="Comma separated languages to keep besides the fallback and active language.",
        ),
    ] = None,
    select: Annotated[
        list[str] | None,
        typer.Option(
            "--select",
            "-s",
            help="Language to keep, repeatable; cross-checked against --keep.",
        ),
    ] = None,
    execute: Annotated[
        bool,
        typer.Option("--execute", help="Delete the directories instead of showing them."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    active_lang: Annotated[
        str | None,
        typer.Option("--active-lang", help="Override the detected active language."),
    ] = None,
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
    """Preview or delete the language directories outside the keep list."""
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(ctx)
    layout = require_layout(ctx, config)
    always = resolve_always_kept(config, layout, active_lang)
    active = always[-1]

    inventory = scan_installation(layout)

    try:
        result = reconcile(inventory, always, keep_text=keep, selected=select)
    except InvalidRequestError as e:
        print_error(escape(str(e)))
        print_info("Pass the languages to keep with --keep, e.g. --keep de,fr")
        raise typer.Exit(code=2) from e

    _print_warnings(result)

    deletion = filter_inventory(inventory, result.keep_set)

    if not execute:
        if output_format == OutputFormat.JSON:
            _print_json(result, deletion)
        else:
            _print_preview(inventory, result, deletion, active)
        return

    if deletion.is_empty():
        if output_format == OutputFormat.JSON:
            _print_results_json([])
        else:
            print_success("Nothing to delete. All languages are kept.")
        return

    if output_format == OutputFormat.TABLE:
        console.print(create_inventory_tree(deletion, None, active, title="Languages to Delete"))

    if not yes:
        confirmed = typer.confirm(
            f"\nProceed with deleting {deletion.count()} language directories?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    results = LanguageRemover(layout).remove(deletion)

    if output_format == OutputFormat.JSON:
        _print_results_json(results)
    else:
        console.print(create_results_table(results))
        print_results_summary(results)

    if any(not r.success for r in results):
        raise typer.Exit(code=1)


# === Private helper functions ===


def _print_warnings(result: Reconciliation) -> None:
    """Warn about a disagreeing selection and unknown languages."""
    if result.discrepancy:
        print_warning(
            f"The keep list ({escape(result.keep_set.as_text())}) does not match the selected "
            f"languages ({escape(','.join(result.selected))}). The keep list is used."
        )
    if result.has_unknown_languages:
        print_warning(
            "These languages to keep were not found in any module: "
            + escape(",".join(result.unknown_languages))
        )


def _print_preview(
    inventory: ModuleInventory,
    result: Reconciliation,
    deletion: ModuleInventory,
    active: str,
) -> None:
    """Show every language with those to be deleted struck through."""
    print_info("Dry run: the struck-through languages would be deleted.")
    console.print(f"Keeping: {format_language_list(result.keep_set, None, active)}")
    console.print(
        "Available languages: "
        + format_language_list(result.all_languages, result.keep_set, active)
    )
    console.print(create_inventory_tree(inventory, result.keep_set, active))

    if deletion.is_empty():
        print_success("Nothing to delete. All languages are kept.")
        return

    console.print(
        f"\n[dim]{deletion.count()} language directories would be deleted. "
        "Run again with --execute to delete them.[/dim]"
    )


def _print_json(result: Reconciliation, deletion: ModuleInventory) -> None:
    """Display the reconciliation and deletion inventory as JSON."""
    data = {
        "keep": list(result.keep_set),
        "selected": list(result.selected),
        "unknown_languages": list(result.unknown_languages),
        "discrepancy": result.discrepancy,
        "delete": inventory_to_dict(deletion),
    }
    console.print_json(json.dumps(data))


def _print_results_json(results: list[RemovalResult]) -> None:
    """Display removal results as JSON."""
    data = [
        {"path": r.path, "success": r.success, "error": r.error, "is_dir": r.is_dir}
        for r in results
    ]
    console.print_json(json.dumps(data))
