"""Shared Rich display functions for inventories and removal results.

Languages outside the keep set are struck through, the active language
is highlighted, and modules are listed per category.
"""

from collections.abc import Container, Iterable
from typing import Any

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from langprune.languages.filter import is_kept
from langprune.languages.models import Category, ModuleInventory, RemovalResult
from langprune.utils.formatting import console, print_success

_CATEGORY_LABELS: dict[Category, str] = {
    Category.CORE: "Core",
    Category.TEMPLATES: "Templates",
    Category.PLUGINS: "Plugins",
}


def format_language(code: str, kept: bool, active: bool = False) -> str:
    """Format a language code with markup for its state."""
    text = escape(code)
    if not kept:
        return f"[removed]{text}[/removed]"
    if active:
        return f"[active]{text}[/active]"
    return f"[kept]{text}[/kept]"


def format_language_list(
    codes: Iterable[str],
    keep_set: Container[str] | None = None,
    active: str | None = None,
) -> str:
    """Format codes as an inline list; None keeps every code."""
    parts = [format_language(code, is_kept(code, keep_set), code == active) for code in codes]
    return " ".join(parts) if parts else "[muted]-[/muted]"


def create_inventory_tree(
    inventory: ModuleInventory,
    keep_set: Container[str] | None = None,
    active: str | None = None,
    title: str = "Available Languages",
) -> Tree:
    """Create a Rich tree listing the languages of every module.

    Args:
        inventory: Inventory to display.
        keep_set: Languages to keep; others are struck through. None
            keeps everything.
        active: Active UI language, highlighted.
        title: Tree label.

    Returns:
        Rich Tree with one branch per category.
    """
    tree = Tree(f"[bold_header]{escape(title)}[/bold_header]", guide_style="border")

    core_label = f"[module]{_CATEGORY_LABELS[Category.CORE]}:[/module] "
    tree.add(core_label + format_language_list(inventory.core.codes, keep_set, active))

    named = ((Category.TEMPLATES, inventory.templates), (Category.PLUGINS, inventory.plugins))
    for category, group in named:
        branch = tree.add(f"[bold]{_CATEGORY_LABELS[category]}[/bold]")
        if not group.modules:
            branch.add("[muted]none installed[/muted]")
            continue
        for name, codes in group.modules.items():
            branch.add(
                f"[module]{escape(name)}:[/module] {format_language_list(codes, keep_set, active)}"
            )

    return tree


def inventory_to_dict(inventory: ModuleInventory) -> dict[str, Any]:
    """Convert an inventory to a JSON-serializable dictionary."""
    return {
        "core": list(inventory.core.codes),
        "templates": {name: list(codes) for name, codes in inventory.templates.modules.items()},
        "plugins": {name: list(codes) for name, codes in inventory.plugins.modules.items()},
    }


def create_results_table(results: list[RemovalResult]) -> Table:
    """Create a Rich table displaying removal results.

    Args:
        results: Removal results in the order they were produced.

    Returns:
        Rich Table with one row per removed (or failed) path.
    """
    table = Table(
        title="Deletion Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Type", width=5)
    table.add_column("Path", overflow="fold")
    table.add_column("Details", style="dim")

    for r in results:
        if r.success:
            status = "[success]OK[/success]"
            detail = ""
        else:
            status = "[error]FAIL[/error]"
            detail = r.error or "Unknown error"
        table.add_row(status, "dir" if r.is_dir else "file", escape(r.path), escape(detail))

    return table


def print_results_summary(results: list[RemovalResult]) -> None:
    """Print a summary of removal results."""
    success_count = sum(1 for r in results if r.success)
    fail_count = len(results) - success_count

    if fail_count == 0:
        print_success(f"All {success_count} path(s) deleted successfully.")
    else:
        console.print(
            f"\n[success]{success_count} deleted[/success], [error]{fail_count} failed[/error]"
        )
