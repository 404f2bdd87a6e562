"""Deletion inventory computation.

Walks an inventory group by group and drops every language that is to
be kept, leaving the languages scheduled for deletion. The inventory
shape, including modules left with no languages, is preserved.
"""

from collections.abc import Container, Iterable

from langprune.languages.models import (
    CoreLanguages,
    LanguageCode,
    LanguageGroup,
    ModuleInventory,
    NamedLanguages,
)


def is_kept(code: LanguageCode, keep_set: Container[LanguageCode] | None) -> bool:
    """Check whether a language survives; None keeps everything."""
    return keep_set is None or code in keep_set


def filter_inventory(
    inventory: ModuleInventory,
    keep_set: Container[LanguageCode] | None,
) -> ModuleInventory:
    """Return the languages of an inventory that are not kept.

    This is a pure function; calling it for a preview has no side effects.

    Args:
        inventory: Full language inventory.
        keep_set: Languages to keep. None keeps every language, so the
            result has no languages at all.

    Returns:
        Deletion inventory with the same modules as the input.
    """
    return ModuleInventory(
        core=_filter_core(inventory.core, keep_set),
        templates=_filter_named(inventory.templates, keep_set),
        plugins=_filter_named(inventory.plugins, keep_set),
    )


def filter_group(
    group: LanguageGroup,
    keep_set: Container[LanguageCode] | None,
) -> LanguageGroup:
    """Filter a single language group, dispatching on its kind."""
    if isinstance(group, CoreLanguages):
        return _filter_core(group, keep_set)
    if isinstance(group, NamedLanguages):
        return _filter_named(group, keep_set)
    msg = f"Unsupported language group: {type(group).__name__}"
    raise TypeError(msg)


def _filter_core(
    group: CoreLanguages,
    keep_set: Container[LanguageCode] | None,
) -> CoreLanguages:
    return CoreLanguages(_drop_kept(group.codes, keep_set))


def _filter_named(
    group: NamedLanguages,
    keep_set: Container[LanguageCode] | None,
) -> NamedLanguages:
    return NamedLanguages(
        {name: _drop_kept(codes, keep_set) for name, codes in group.modules.items()}
    )


def _drop_kept(
    codes: Iterable[LanguageCode],
    keep_set: Container[LanguageCode] | None,
) -> tuple[LanguageCode, ...]:
    return tuple(code for code in codes if not is_kept(code, keep_set))
