"""Language directory discovery.

Lists the language subdirectories of every module and assembles them
into a ModuleInventory. Scanning never modifies the filesystem; a module
whose ``lang`` directory is missing or unreadable simply has no languages.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from langprune.languages.errors import LayoutError
from langprune.languages.models import (
    LANG_DIR_NAME,
    Category,
    CoreLanguages,
    LanguageCode,
    ModuleInventory,
    NamedLanguages,
)

if TYPE_CHECKING:
    from langprune.languages.layout import PathResolver

logger = logging.getLogger(__name__)


def list_subdirectories(path: Path) -> list[str]:
    """Return the names of the immediate subdirectories of a path.

    Files are ignored and the scan never descends into grandchildren.
    A missing path, a path that is not a directory, or a directory that
    cannot be read yields an empty list.

    Args:
        path: Directory to list.

    Returns:
        Subdirectory names, sorted by name.
    """
    try:
        if not path.is_dir():
            return []
        entries = sorted(path.iterdir())
    except OSError as e:
        logger.warning("Cannot list directory %s: %s", path, e)
        return []

    names: list[str] = []
    for entry in entries:
        try:
            if entry.is_dir():
                names.append(entry.name)
        except OSError:
            logger.warning("Cannot determine type of: %s", entry)
    return names


def list_languages(module_root: Path) -> tuple[LanguageCode, ...]:
    """Return the language codes available below a module root.

    Args:
        module_root: Root directory of the module.

    Returns:
        Language codes, empty if the module has no ``lang`` directory.
    """
    return tuple(list_subdirectories(module_root / LANG_DIR_NAME))


def build_inventory(
    template_names: Iterable[str],
    plugin_names: Iterable[str],
    resolver: PathResolver,
) -> ModuleInventory:
    """Build the language inventory of an installation.

    Every given module gets an entry, even when it has no languages.
    Failing to resolve or read one module is logged and does not stop
    the enumeration of the others.

    Args:
        template_names: Names of the installed templates.
        plugin_names: Names of the installed plugins.
        resolver: Maps modules to their root directories.

    Returns:
        ModuleInventory describing every module's language codes.
    """
    return ModuleInventory(
        core=CoreLanguages(_scan_module(resolver, Category.CORE, None)),
        templates=_scan_category(resolver, Category.TEMPLATES, template_names),
        plugins=_scan_category(resolver, Category.PLUGINS, plugin_names),
    )


def _scan_category(
    resolver: PathResolver,
    category: Category,
    names: Iterable[str],
) -> NamedLanguages:
    """Scan every named module of one category."""
    modules: dict[str, tuple[LanguageCode, ...]] = {}
    for name in names:
        if name in modules:
            continue
        modules[name] = _scan_module(resolver, category, name)
    return NamedLanguages(modules)


def _scan_module(
    resolver: PathResolver,
    category: Category,
    name: str | None,
) -> tuple[LanguageCode, ...]:
    """Scan a single module, isolating failures to that module."""
    try:
        root = resolver.module_root(category, name)
        codes = list_languages(root)
    except (LayoutError, OSError) as e:
        logger.warning("Skipping %s module %s: %s", category.value, name or "core", e)
        return ()

    logger.debug("Found %d language(s) for %s %s", len(codes), category.value, name or "")
    return codes
