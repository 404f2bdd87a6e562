"""Tests for recursive language directory removal."""

from pathlib import Path, PurePosixPath

import pytest
from langprune.languages.filesystem import FileSystem, LocalFileSystem
from langprune.languages.filter import filter_inventory
from langprune.languages.layout import InstallationLayout
from langprune.languages.models import (
    CoreLanguages,
    KeepSet,
    ModuleInventory,
    NamedLanguages,
)
from langprune.languages.remover import LanguageRemover
from langprune.languages.scanner import build_inventory


class MemoryFileSystem(FileSystem):
    """In-memory tree of directories and files for removal tests.

    Args:
        dirs: Directory paths; parents are added automatically.
        files: File paths.
        protected: Paths whose removal raises PermissionError.
    """

    def __init__(
        self,
        dirs: list[str],
        files: list[str] | None = None,
        protected: list[str] | None = None,
    ) -> None:
        self.dirs: set[PurePosixPath] = set()
        self.files: set[PurePosixPath] = {PurePosixPath(f) for f in files or []}
        self.protected = {PurePosixPath(p) for p in protected or []}
        for d in dirs:
            path = PurePosixPath(d)
            self.dirs.add(path)
            self.dirs.update(path.parents)
        for f in self.files:
            self.dirs.update(f.parents)
        self.removed: list[str] = []

    def exists(self, path: Path) -> bool:
        key = PurePosixPath(path)
        return key in self.dirs or key in self.files

    def is_dir(self, path: Path) -> bool:
        return PurePosixPath(path) in self.dirs

    def list_dir(self, path: Path) -> list[str]:
        key = PurePosixPath(path)
        if key not in self.dirs:
            raise FileNotFoundError(str(path))
        return [p.name for p in self.dirs | self.files if p.parent == key and p != key]

    def remove_file(self, path: Path) -> None:
        key = PurePosixPath(path)
        if key in self.protected:
            raise PermissionError(f"Permission denied: '{path}'")
        if key not in self.files:
            raise FileNotFoundError(str(path))
        self.files.discard(key)
        self.removed.append(str(path))

    def remove_dir(self, path: Path) -> None:
        key = PurePosixPath(path)
        if key in self.protected:
            raise PermissionError(f"Permission denied: '{path}'")
        if self.list_dir(path):
            raise OSError(f"Directory not empty: '{path}'")
        self.dirs.discard(key)
        self.removed.append(str(path))


class TestLanguageRemoverLocal:
    """Tests for LanguageRemover against a real directory tree."""

    def test_removes_scheduled_directories(
        self, wiki_root: Path, layout: InstallationLayout
    ) -> None:
        """Keeping en removes the four other language directories."""
        inventory = build_inventory(layout.template_names(), layout.plugin_names(), layout)
        deletion = filter_inventory(inventory, KeepSet.of(["en"]))

        results = LanguageRemover(layout).remove(deletion)

        assert len(results) == 4
        assert all(r.success and r.is_dir for r in results)
        assert (wiki_root / "inc" / "lang" / "en").is_dir()
        assert (wiki_root / "lib" / "tpl" / "t1" / "lang" / "en").is_dir()
        assert not (wiki_root / "inc" / "lang" / "fr").exists()
        assert not (wiki_root / "inc" / "lang" / "de").exists()
        assert not (wiki_root / "lib" / "tpl" / "t1" / "lang" / "de").exists()
        assert not (wiki_root / "lib" / "plugins" / "p1" / "lang" / "fr").exists()
        # Module directories themselves survive
        assert (wiki_root / "lib" / "plugins" / "p1" / "lang").is_dir()

    def test_removes_nested_content(self, wiki_root: Path, layout: InstallationLayout) -> None:
        """Files and subdirectories are removed before their parent."""
        fr = wiki_root / "inc" / "lang" / "fr"
        (fr / "lang.php").write_text("<?php")
        (fr / "sub").mkdir()
        (fr / "sub" / "intro.txt").write_text("intro")

        deletion = ModuleInventory(core=CoreLanguages(("fr",)))
        results = LanguageRemover(layout).remove(deletion)

        paths = [r.path for r in results]
        assert paths == [
            str(fr / "lang.php"),
            str(fr / "sub" / "intro.txt"),
            str(fr / "sub"),
            str(fr),
        ]
        assert [r.is_dir for r in results] == [False, False, True, True]
        assert not fr.exists()

    def test_symlink_not_followed(
        self, tmp_path: Path, wiki_root: Path, layout: InstallationLayout
    ) -> None:
        """A symlink inside a language directory is unlinked, not traversed."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "precious.txt").write_text("keep me")
        de = wiki_root / "inc" / "lang" / "de"
        (de / "link").symlink_to(outside, target_is_directory=True)

        results = LanguageRemover(layout).remove(ModuleInventory(core=CoreLanguages(("de",))))

        assert all(r.success for r in results)
        assert (outside / "precious.txt").read_text() == "keep me"
        assert not de.exists()

    def test_missing_directory_is_skipped(self, layout: InstallationLayout) -> None:
        """A language that is already gone yields no result."""
        deletion = ModuleInventory(core=CoreLanguages(("xx",)))
        assert LanguageRemover(layout).remove(deletion) == []

    def test_second_run_is_noop(self, layout: InstallationLayout) -> None:
        """Removing the same deletion twice is harmless."""
        deletion = ModuleInventory(core=CoreLanguages(("fr",)))
        remover = LanguageRemover(layout)

        assert len(remover.remove(deletion)) == 1
        assert remover.remove(deletion) == []

    def test_empty_deletion(self, layout: InstallationLayout) -> None:
        """Nothing scheduled means nothing deleted."""
        deletion = ModuleInventory(plugins=NamedLanguages({"p2": ()}))
        assert LanguageRemover(layout).remove(deletion) == []


class TestLanguageRemoverFailures:
    """Tests for best-effort removal with failures."""

    ROOT = "/wiki"

    def _deletion(self) -> ModuleInventory:
        return ModuleInventory(
            core=CoreLanguages(("fr", "de")),
            templates=NamedLanguages({"t1": ("de",)}),
            plugins=NamedLanguages({"p1": ("fr",)}),
        )

    def _fs(self, protected: list[str] | None = None) -> MemoryFileSystem:
        return MemoryFileSystem(
            dirs=[
                "/wiki/inc/lang/en",
                "/wiki/inc/lang/fr",
                "/wiki/inc/lang/de",
                "/wiki/lib/tpl/t1/lang/de",
                "/wiki/lib/plugins/p1/lang/fr",
            ],
            protected=protected,
        )

    def test_failure_does_not_abort(self) -> None:
        """One protected directory fails; the others are still removed."""
        fs = self._fs(protected=["/wiki/inc/lang/de"])
        remover = LanguageRemover(InstallationLayout(Path(self.ROOT)), fs)

        results = remover.remove(self._deletion())

        failed = [r for r in results if not r.success]
        assert len(results) == 4
        assert len(failed) == 1
        assert failed[0].path == "/wiki/inc/lang/de"
        assert "Permission denied" in (failed[0].error or "")
        assert fs.removed == [
            "/wiki/inc/lang/fr",
            "/wiki/lib/tpl/t1/lang/de",
            "/wiki/lib/plugins/p1/lang/fr",
        ]

    def test_failed_child_fails_parent(self) -> None:
        """A directory whose content cannot be removed is reported too."""
        fs = MemoryFileSystem(
            dirs=["/wiki/inc/lang/fr"],
            files=["/wiki/inc/lang/fr/a.txt", "/wiki/inc/lang/fr/b.txt"],
            protected=["/wiki/inc/lang/fr/a.txt"],
        )
        remover = LanguageRemover(InstallationLayout(Path(self.ROOT)), fs)

        results = remover.remove(ModuleInventory(core=CoreLanguages(("fr",))))

        assert [(r.path, r.success) for r in results] == [
            ("/wiki/inc/lang/fr/a.txt", False),
            ("/wiki/inc/lang/fr/b.txt", True),
            ("/wiki/inc/lang/fr", False),
        ]

    def test_unresolvable_module_skipped(self) -> None:
        """A module with an invalid name is skipped without a result."""
        fs = self._fs()
        remover = LanguageRemover(InstallationLayout(Path(self.ROOT)), fs)
        deletion = ModuleInventory(plugins=NamedLanguages({"..": ("fr",), "p1": ("fr",)}))

        results = remover.remove(deletion)

        assert [r.path for r in results] == ["/wiki/lib/plugins/p1/lang/fr"]

    def test_language_paths(self) -> None:
        """language_paths resolves every entry in inventory order."""
        remover = LanguageRemover(InstallationLayout(Path(self.ROOT)), self._fs())

        paths = remover.language_paths(self._deletion())

        assert [str(p) for p in paths] == [
            "/wiki/inc/lang/fr",
            "/wiki/inc/lang/de",
            "/wiki/lib/tpl/t1/lang/de",
            "/wiki/lib/plugins/p1/lang/fr",
        ]


class TestLocalFileSystem:
    """Tests for LocalFileSystem."""

    def test_dangling_symlink_exists(self, tmp_path: Path) -> None:
        """A dangling symlink exists but is not a directory."""
        link = tmp_path / "link"
        link.symlink_to(tmp_path / "missing")
        fs = LocalFileSystem()

        assert fs.exists(link)
        assert not fs.is_dir(link)

    def test_remove_non_empty_dir_fails(self, tmp_path: Path) -> None:
        """remove_dir only removes empty directories."""
        (tmp_path / "d").mkdir()
        (tmp_path / "d" / "f").write_text("x")

        with pytest.raises(OSError):
            LocalFileSystem().remove_dir(tmp_path / "d")
