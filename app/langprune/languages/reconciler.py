"""Keep-language reconciliation.

Merges the languages that are always kept (the fallback language and
the active UI language) with the user's keep list, and cross-checks the
result against the inventory and against the independent selection
channel.

The free-text keep list is authoritative for filtering. The selection is
only compared against it so that a desynchronized client can be warned
about; it never changes what gets deleted.
"""

import logging
from collections.abc import Iterable

from langprune.languages.errors import InvalidRequestError
from langprune.languages.models import KeepSet, LanguageCode, ModuleInventory, Reconciliation

logger = logging.getLogger(__name__)

# Fallback language of the host; never deleted
DEFAULT_LANG: LanguageCode = "en"


def unique_languages(inventory: ModuleInventory) -> tuple[LanguageCode, ...]:
    """Return every distinct language of an inventory, in first-seen order."""
    return tuple(dict.fromkeys(inventory.languages()))


def parse_language_list(text: str) -> tuple[LanguageCode, ...]:
    """Split a comma separated list of language codes.

    Empty items are dropped. Items are neither trimmed nor case-folded,
    since codes must match directory names exactly.

    Args:
        text: Comma separated language codes, e.g. ``"de,fr"``.

    Returns:
        Language codes in the given order.
    """
    return tuple(code for code in text.split(",") if code)


def always_kept(
    active_language: LanguageCode | None,
    fallback: LanguageCode = DEFAULT_LANG,
) -> tuple[LanguageCode, ...]:
    """Return the languages kept regardless of user input."""
    if active_language:
        return tuple(dict.fromkeys((fallback, active_language)))
    return (fallback,)


def build_keep_set(
    always_keep: Iterable[LanguageCode],
    *sources: Iterable[LanguageCode],
) -> KeepSet:
    """Union the always-kept languages with any number of user sources."""
    codes: list[LanguageCode] = list(always_keep)
    for source in sources:
        codes.extend(source)
    return KeepSet.of(code for code in codes if code)


def reconcile(
    inventory: ModuleInventory,
    always_keep: Iterable[LanguageCode],
    keep_text: str | None,
    selected: Iterable[LanguageCode] | None,
    first_run: bool = False,
) -> Reconciliation:
    """Compute the keep set of a request and its warnings.

    On a first run nothing has been submitted yet, so every language of
    the inventory is kept and no warning is computed. On a processing
    run the keep set is the always-kept languages plus the text list.

    The first always-kept language is the fallback and is part of the
    selection even when not ticked, as it cannot be deselected. Passing
    ``selected=None`` means the selection channel was not used and no
    discrepancy can be detected.

    Args:
        inventory: Full language inventory.
        always_keep: Fallback and active language.
        keep_text: Comma separated languages to keep.
        selected: Languages ticked in the selection channel.
        first_run: True if the user has not submitted anything yet.

    Returns:
        Reconciliation with the keep set and warning flags.

    Raises:
        InvalidRequestError: If a processing run has no keep list.
    """
    always = tuple(always_keep)
    all_languages = unique_languages(inventory)

    if first_run:
        return Reconciliation(
            keep_set=build_keep_set(always, all_languages),
            selected=all_languages,
            all_languages=all_languages,
        )

    if keep_text is None:
        msg = "A list of languages to keep is required"
        raise InvalidRequestError(msg)

    keep_set = build_keep_set(always, parse_language_list(keep_text))

    known = set(all_languages)
    unknown = tuple(code for code in keep_set if code not in known)
    if unknown:
        logger.info("Languages to keep not found in any module: %s", ",".join(unknown))

    if selected is None:
        selection = keep_set.codes
        discrepancy = False
    else:
        selection = tuple(dict.fromkeys((*always[:1], *selected)))
        discrepancy = keep_set.as_set() != set(selection)
        if discrepancy:
            logger.info(
                "Keep list %s does not match selection %s",
                keep_set.as_text(),
                ",".join(selection),
            )

    return Reconciliation(
        keep_set=keep_set,
        selected=selection,
        all_languages=all_languages,
        unknown_languages=unknown,
        discrepancy=discrepancy,
    )
