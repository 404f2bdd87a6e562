"""Filesystem access used by the language remover.

The remover only talks to the FileSystem interface, so that deletion
can be exercised against an in-memory tree.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path


class FileSystem(ABC):
    """Minimal set of filesystem operations needed for recursive removal."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check if a path exists; dangling symlinks exist."""

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Check if a path is a real directory (not a symlink to one)."""

    @abstractmethod
    def list_dir(self, path: Path) -> list[str]:
        """Return the entry names of a directory.

        Raises:
            OSError: If the directory cannot be listed.
        """

    @abstractmethod
    def remove_file(self, path: Path) -> None:
        """Remove a file or symlink.

        Raises:
            OSError: If the file cannot be removed.
        """

    @abstractmethod
    def remove_dir(self, path: Path) -> None:
        """Remove an empty directory.

        Raises:
            OSError: If the directory cannot be removed.
        """


class LocalFileSystem(FileSystem):
    """FileSystem backed by the operating system."""

    def exists(self, path: Path) -> bool:
        return path.exists() or path.is_symlink()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir() and not path.is_symlink()

    def list_dir(self, path: Path) -> list[str]:
        return os.listdir(path)

    def remove_file(self, path: Path) -> None:
        path.unlink()

    def remove_dir(self, path: Path) -> None:
        path.rmdir()
