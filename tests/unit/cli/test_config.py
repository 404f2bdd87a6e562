"""Unit tests for the config command."""

from pathlib import Path

from langprune.cli.main import app
from langprune.core.config import load_config
from langprune.core.paths import get_config_path
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigInit:
    """Tests for langprune config init."""

    def test_init_writes_config(self, wiki_root: Path) -> None:
        """init stores the given root in a new config file."""
        result = runner.invoke(app, ["config", "init", "--root", str(wiki_root)])

        assert result.exit_code == 0
        assert "Config written" in result.output
        assert load_config().installation.root == wiki_root.resolve()

    def test_init_refuses_overwrite(self, wiki_root: Path) -> None:
        """An existing config is only replaced with --force."""
        runner.invoke(app, ["config", "init", "--root", str(wiki_root)])

        result = runner.invoke(app, ["config", "init", "--root", str(wiki_root / "inc")])
        assert result.exit_code == 1
        assert "Config already exists" in result.output
        assert load_config().installation.root == wiki_root.resolve()

        result = runner.invoke(
            app, ["config", "init", "--root", str(wiki_root / "inc"), "--force"]
        )
        assert result.exit_code == 0
        assert load_config().installation.root == (wiki_root / "inc").resolve()

    def test_init_custom_path(self, tmp_path: Path, wiki_root: Path) -> None:
        """The global --config option selects the file to write."""
        target = tmp_path / "custom.toml"

        result = runner.invoke(
            app, ["--config", str(target), "config", "init", "--root", str(wiki_root)]
        )

        assert result.exit_code == 0
        assert target.exists()
        assert not get_config_path().exists()


class TestConfigShow:
    """Tests for langprune config show."""

    def test_show_defaults(self, wiki_root: Path) -> None:
        """Without a config file the defaults are shown."""
        result = runner.invoke(app, ["--root", str(wiki_root), "config", "show"])

        assert result.exit_code == 0
        assert "Config file" in result.output
        assert "Fallback language" in result.output
        assert "en (fallback)" in result.output

    def test_show_detected_language(self, wiki_root: Path) -> None:
        """The active language found in the installation is shown."""
        (wiki_root / "conf").mkdir()
        (wiki_root / "conf" / "dokuwiki.php").write_text("$conf['lang'] = 'fr';")

        result = runner.invoke(app, ["--root", str(wiki_root), "config", "show"])

        assert result.exit_code == 0
        assert "fr (detected)" in result.output

    def test_show_root_with_markup_characters(self, tmp_path: Path) -> None:
        """Paths are shown verbatim even when they contain brackets."""
        result = runner.invoke(app, ["--root", str(tmp_path / "[" / "x]"), "config", "show"])

        assert result.exception is None
        assert result.exit_code == 0
        assert "Installation root" in result.output

    def test_show_without_subcommand(self) -> None:
        """config alone prints its help."""
        result = runner.invoke(app, ["config"])
        assert "init" in result.output
        assert "show" in result.output


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "langprune version" in result.output
