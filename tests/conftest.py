"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from langprune.languages.layout import InstallationLayout


def make_lang_dirs(module_root: Path, *codes: str) -> None:
    """Create ``lang/<code>`` directories below a module root."""
    for code in codes:
        (module_root / "lang" / code).mkdir(parents=True, exist_ok=True)


@pytest.fixture
def wiki_root(tmp_path: Path) -> Path:
    """A small installation tree.

    core:      en, fr, de
    templates: t1 (en, de)
    plugins:   p1 (fr), p2 (no lang directory)
    """
    root = tmp_path / "wiki"
    make_lang_dirs(root / "inc", "en", "fr", "de")
    make_lang_dirs(root / "lib" / "tpl" / "t1", "en", "de")
    make_lang_dirs(root / "lib" / "plugins" / "p1", "fr")
    (root / "lib" / "plugins" / "p2").mkdir(parents=True)
    return root


@pytest.fixture
def layout(wiki_root: Path) -> InstallationLayout:
    """InstallationLayout for the wiki_root tree."""
    return InstallationLayout(wiki_root)


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory."""
    config_home = tmp_path / "config-home"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home
