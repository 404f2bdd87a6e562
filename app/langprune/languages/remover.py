"""Recursive removal of language directories.

Deletes every language directory of a deletion inventory, depth first,
reporting one result per file or directory. Deletion is best effort: a
failure is recorded for its path and the run carries on with siblings
and the remaining languages. There is no rollback; a partially removed
language tree is reported as such and a later run picks up the rest.

No locking is performed. Two runs against the same installation at the
same time are not coordinated, and will report failures for objects the
other run removed first.
"""

import logging
from pathlib import Path

from langprune.languages.errors import LayoutError
from langprune.languages.filesystem import FileSystem, LocalFileSystem
from langprune.languages.layout import PathResolver
from langprune.languages.models import ModuleInventory, RemovalResult

logger = logging.getLogger(__name__)


class LanguageRemover:
    """Removes the language directories listed in a deletion inventory.

    Args:
        resolver: Maps modules to their root directories.
        filesystem: Filesystem to operate on. Defaults to the local one.
    """

    def __init__(self, resolver: PathResolver, filesystem: FileSystem | None = None) -> None:
        self._resolver = resolver
        self._fs = filesystem or LocalFileSystem()

    def language_paths(self, deletion: ModuleInventory) -> list[Path]:
        """Resolve every scheduled language to its directory.

        Args:
            deletion: Deletion inventory.

        Returns:
            Language directories in inventory order.

        Raises:
            LayoutError: If a module cannot be resolved.
        """
        return [
            self._resolver.language_path(entry.category, entry.module, entry.code)
            for entry in deletion.entries()
        ]

    def remove(self, deletion: ModuleInventory) -> list[RemovalResult]:
        """Delete every language directory of a deletion inventory.

        A language directory that no longer exists is skipped without a
        result, so running the same removal twice is harmless.

        Args:
            deletion: Deletion inventory, consumed once.

        Returns:
            One RemovalResult per file or directory visited, children
            before their parent directory.
        """
        results: list[RemovalResult] = []

        for entry in deletion.entries():
            try:
                path = self._resolver.language_path(entry.category, entry.module, entry.code)
            except LayoutError as e:
                logger.warning("Cannot resolve %s/%s: %s", entry.module or "core", entry.code, e)
                continue

            if not self._fs.exists(path):
                logger.debug("Already gone: %s", path)
                continue

            results.extend(self._remove_tree(path))

        return results

    def _remove_tree(self, path: Path) -> list[RemovalResult]:
        """Remove a path and everything below it, children first."""
        if not self._fs.is_dir(path):
            return [self._remove_single(path, is_dir=False)]

        results: list[RemovalResult] = []
        try:
            children = sorted(self._fs.list_dir(path))
        except OSError as e:
            # rmdir below reports the failure if anything is left
            logger.warning("Cannot list directory %s: %s", path, e)
            children = []

        for child in children:
            results.extend(self._remove_tree(path / child))

        results.append(self._remove_single(path, is_dir=True))
        return results

    def _remove_single(self, path: Path, *, is_dir: bool) -> RemovalResult:
        """Remove one file or empty directory."""
        try:
            if is_dir:
                self._fs.remove_dir(path)
            else:
                self._fs.remove_file(path)
        except OSError as e:
            logger.info("Failed to delete %s: %s", path, e)
            return RemovalResult(path=str(path), success=False, error=str(e), is_dir=is_dir)

        logger.info("Deleted %s", path)
        return RemovalResult(path=str(path), success=True, is_dir=is_dir)
