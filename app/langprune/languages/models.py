"""Language inventory models.

This module defines the data structures describing which language
directories exist for each module of an installation: the core, every
template and every plugin. The same shapes are used for the full
inventory and for the subset scheduled for deletion.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

# Name of the per-module directory holding one subdirectory per language
LANG_DIR_NAME = "lang"

# A language code is the name of a directory below a module's ``lang/``
# directory. Codes are compared bit-exactly.
LanguageCode = str


class Category(str, Enum):
    """Kind of module owning language directories.

    Attributes:
        CORE: The single core area of the installation.
        TEMPLATES: Named template modules.
        PLUGINS: Named plugin modules.
    """

    CORE = "core"
    TEMPLATES = "templates"
    PLUGINS = "plugins"


@dataclass(frozen=True, slots=True)
class CoreLanguages:
    """Language codes available for the core area.

    Attributes:
        codes: Language codes in scan order.
    """

    codes: tuple[LanguageCode, ...] = ()


@dataclass(frozen=True, slots=True)
class NamedLanguages:
    """Language codes available for each named module of a category.

    Attributes:
        modules: Mapping of module name to its language codes. A module
            without a ``lang`` directory maps to an empty tuple.
    """

    modules: dict[str, tuple[LanguageCode, ...]] = field(default_factory=dict)


LanguageGroup = CoreLanguages | NamedLanguages


@dataclass(frozen=True, slots=True)
class LanguageEntry:
    """A single language directory of a single module.

    Attributes:
        category: Category of the owning module.
        module: Module name, None for the core.
        code: Language code.
    """

    category: Category
    module: str | None
    code: LanguageCode


@dataclass(frozen=True, slots=True)
class ModuleInventory:
    """Available (or scheduled) language codes per module.

    Attributes:
        core: Languages of the core area.
        templates: Languages per template.
        plugins: Languages per plugin.
    """

    core: CoreLanguages = field(default_factory=CoreLanguages)
    templates: NamedLanguages = field(default_factory=NamedLanguages)
    plugins: NamedLanguages = field(default_factory=NamedLanguages)

    def groups(self) -> Iterator[tuple[Category, LanguageGroup]]:
        """Yield each category together with its language group."""
        yield Category.CORE, self.core
        yield Category.TEMPLATES, self.templates
        yield Category.PLUGINS, self.plugins

    def entries(self) -> Iterator[LanguageEntry]:
        """Yield every language directory as a flat entry."""
        for code in self.core.codes:
            yield LanguageEntry(Category.CORE, None, code)
        named = ((Category.TEMPLATES, self.templates), (Category.PLUGINS, self.plugins))
        for category, group in named:
            for name, codes in group.modules.items():
                for code in codes:
                    yield LanguageEntry(category, name, code)

    def languages(self) -> Iterator[LanguageCode]:
        """Yield every language code, duplicates included."""
        for entry in self.entries():
            yield entry.code

    def count(self) -> int:
        """Return the number of language directories."""
        return sum(1 for _ in self.entries())

    def is_empty(self) -> bool:
        """Check whether no module has any language directory."""
        return self.count() == 0


@dataclass(frozen=True, slots=True)
class KeepSet:
    """Immutable set of language codes that must survive deletion.

    Codes are deduplicated and keep the order in which they were first
    given, which is only used for display. Equality and membership follow
    set semantics.

    Attributes:
        codes: Deduplicated language codes.
    """

    codes: tuple[LanguageCode, ...] = ()

    @classmethod
    def of(cls, codes: Iterable[LanguageCode]) -> "KeepSet":
        """Build a KeepSet from any iterable, dropping duplicates."""
        return cls(tuple(dict.fromkeys(codes)))

    def __contains__(self, code: object) -> bool:
        return code in self.codes

    def __iter__(self) -> Iterator[LanguageCode]:
        return iter(self.codes)

    def __len__(self) -> int:
        return len(self.codes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KeepSet):
            return set(self.codes) == set(other.codes)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self.codes))

    def as_set(self) -> frozenset[LanguageCode]:
        """Return the codes as a frozenset."""
        return frozenset(self.codes)

    def as_text(self) -> str:
        """Return the codes as a comma separated list."""
        return ",".join(self.codes)


@dataclass(frozen=True, slots=True)
class Reconciliation:
    """Outcome of merging the keep-language inputs of one request.

    Attributes:
        keep_set: Languages to keep; authoritative for filtering.
        selected: Languages ticked in the selection channel, for display.
        all_languages: Every distinct language found in the inventory.
        unknown_languages: Requested languages absent from the inventory.
        discrepancy: True if the text list and the selection disagree.
    """

    keep_set: KeepSet
    selected: tuple[LanguageCode, ...]
    all_languages: tuple[LanguageCode, ...]
    unknown_languages: tuple[LanguageCode, ...] = ()
    discrepancy: bool = False

    @property
    def has_unknown_languages(self) -> bool:
        """Check if the user asked to keep languages that do not exist."""
        return bool(self.unknown_languages)


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Result of deleting a single file or directory.

    Attributes:
        path: Filesystem path that was operated on.
        success: Whether the object was removed.
        error: Error message if the removal failed, None otherwise.
        is_dir: Whether the object was a directory.
    """

    path: str
    success: bool
    error: str | None = None
    is_dir: bool = False

    def __post_init__(self) -> None:
        """Validate result data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
