"""Language inventory, reconciliation and removal.

This package discovers the language directories of every module of an
installation, works out which languages to keep, and removes the rest.
"""

from langprune.languages.errors import InvalidRequestError, LanguagePruneError, LayoutError
from langprune.languages.filesystem import FileSystem, LocalFileSystem
from langprune.languages.filter import filter_inventory, is_kept
from langprune.languages.layout import (
    InstallationLayout,
    ModuleRegistry,
    PathResolver,
    detect_active_language,
)
from langprune.languages.models import (
    Category,
    CoreLanguages,
    KeepSet,
    LanguageEntry,
    ModuleInventory,
    NamedLanguages,
    Reconciliation,
    RemovalResult,
)
from langprune.languages.reconciler import (
    DEFAULT_LANG,
    always_kept,
    build_keep_set,
    parse_language_list,
    reconcile,
    unique_languages,
)
from langprune.languages.remover import LanguageRemover
from langprune.languages.scanner import build_inventory, list_subdirectories

__all__ = [
    "DEFAULT_LANG",
    "Category",
    "CoreLanguages",
    "FileSystem",
    "InstallationLayout",
    "InvalidRequestError",
    "KeepSet",
    "LanguageEntry",
    "LanguagePruneError",
    "LanguageRemover",
    "LayoutError",
    "LocalFileSystem",
    "ModuleInventory",
    "ModuleRegistry",
    "NamedLanguages",
    "PathResolver",
    "Reconciliation",
    "RemovalResult",
    "always_kept",
    "build_inventory",
    "build_keep_set",
    "detect_active_language",
    "filter_inventory",
    "is_kept",
    "list_subdirectories",
    "parse_language_list",
    "reconcile",
    "unique_languages",
]
