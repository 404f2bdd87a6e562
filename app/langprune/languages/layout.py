"""Installation layout: module registry, path resolution, active language.

The pipeline never hardcodes where modules live. It asks a ModuleRegistry
for the installed template and plugin names and a PathResolver for each
module's root directory; language directories are always found at
``<module-root>/lang/<code>``.

InstallationLayout implements both interfaces for a DokuWiki-style tree::

    <root>/inc/lang/<code>                    core
    <root>/lib/tpl/<template>/lang/<code>     templates
    <root>/lib/plugins/<plugin>/lang/<code>   plugins
"""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

from langprune.languages.errors import LayoutError
from langprune.languages.models import LANG_DIR_NAME, Category, LanguageCode
from langprune.languages.scanner import list_subdirectories

logger = logging.getLogger(__name__)

DEFAULT_CORE_DIR = "inc"
DEFAULT_TEMPLATES_DIR = "lib/tpl"
DEFAULT_PLUGINS_DIR = "lib/plugins"

# Host configuration files, in lookup order
_CONF_FILES: tuple[str, ...] = ("conf/local.php", "conf/dokuwiki.php")

_CONF_LANG_PATTERN = re.compile(r"""\$conf\[\s*['"]lang['"]\s*\]\s*=\s*['"]([^'"]+)['"]""")


class ModuleRegistry(ABC):
    """Source of the installed module names.

    Names are treated as an opaque, order-independent list.
    """

    @abstractmethod
    def template_names(self) -> list[str]:
        """Return the names of all installed templates."""

    @abstractmethod
    def plugin_names(self) -> list[str]:
        """Return the names of all installed plugins."""


class PathResolver(ABC):
    """Maps a module to its root directory."""

    @abstractmethod
    def module_root(self, category: Category, name: str | None) -> Path:
        """Return the root directory of a module.

        Args:
            category: Category of the module.
            name: Module name; None for the core.

        Returns:
            Absolute path to the module root.

        Raises:
            LayoutError: If the module cannot be resolved.
        """

    def language_path(self, category: Category, name: str | None, code: LanguageCode) -> Path:
        """Return the directory holding one language of one module."""
        return self.module_root(category, name) / LANG_DIR_NAME / code


class InstallationLayout(ModuleRegistry, PathResolver):
    """Registry and resolver for a DokuWiki-style directory tree.

    Template and plugin names are the subdirectories of the templates
    and plugins directories.

    Args:
        root: Installation root directory.
        core_dir: Core directory, relative to root.
        templates_dir: Directory containing one directory per template.
        plugins_dir: Directory containing one directory per plugin.
    """

    def __init__(
        self,
        root: Path,
        *,
        core_dir: str = DEFAULT_CORE_DIR,
        templates_dir: str = DEFAULT_TEMPLATES_DIR,
        plugins_dir: str = DEFAULT_PLUGINS_DIR,
    ) -> None:
        self._root = root
        self._core_dir = root / core_dir
        self._templates_dir = root / templates_dir
        self._plugins_dir = root / plugins_dir

    @property
    def root(self) -> Path:
        """Installation root directory."""
        return self._root

    def validate(self) -> None:
        """Check that the installation root exists.

        Raises:
            LayoutError: If the root is missing or not a directory.
        """
        if not self._root.is_dir():
            msg = f"Installation root is not a directory: {self._root}"
            raise LayoutError(msg)

    def template_names(self) -> list[str]:
        return list_subdirectories(self._templates_dir)

    def plugin_names(self) -> list[str]:
        return list_subdirectories(self._plugins_dir)

    def module_root(self, category: Category, name: str | None) -> Path:
        if category == Category.CORE:
            return self._core_dir

        if not name or "/" in name or name in (".", ".."):
            msg = f"Invalid {category.value} module name: {name!r}"
            raise LayoutError(msg)

        if category == Category.TEMPLATES:
            return self._templates_dir / name
        if category == Category.PLUGINS:
            return self._plugins_dir / name

        msg = f"Unknown module category: {category!r}"
        raise LayoutError(msg)


def detect_active_language(root: Path) -> LanguageCode | None:
    """Read the configured UI language of an installation.

    Looks for a ``$conf['lang']`` assignment in ``conf/local.php`` and
    then ``conf/dokuwiki.php``. The last assignment in a file wins.

    Args:
        root: Installation root directory.

    Returns:
        The configured language code, or None if none was found.
    """
    for relative in _CONF_FILES:
        conf_file = root / relative
        try:
            content = conf_file.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.warning("Cannot read %s: %s", conf_file, e)
            continue

        matches = _CONF_LANG_PATTERN.findall(content)
        if matches:
            logger.debug("Active language %s found in %s", matches[-1], conf_file)
            return matches[-1]

    return None
