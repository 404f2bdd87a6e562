"""Exceptions raised by the language pruning pipeline.

Recoverable conditions (missing ``lang`` directories, unknown languages,
a disagreeing selection, single failed deletions) are reported through
return values instead.
"""


class LanguagePruneError(Exception):
    """Base exception for language pruning errors."""


class InvalidRequestError(LanguagePruneError):
    """Raised when a processing request lacks required input."""


class LayoutError(LanguagePruneError):
    """Raised when an installation layout cannot be resolved."""
