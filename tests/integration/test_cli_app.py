"""Integration tests for CLI app entry points."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from platecheck import __version__
from platecheck.cli.app import app
from platecheck.core.config import ConfigManager
from platecheck.models import Settings

runner = CliRunner()


@pytest.fixture
def isolated_config(temp_config_dir, mock_keyring):
    """Point every command at an empty config dir and environment."""
    manager = ConfigManager(config_dir=temp_config_dir, environ={})
    with (
        patch("platecheck.cli.commands.config.ConfigManager", return_value=manager),
        patch("platecheck.cli.commands.sources.ConfigManager", return_value=manager),
        patch("platecheck.cli.commands.lookup.ConfigManager", return_value=manager),
    ):
        yield manager


class TestCLIEntryPoints:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "lookup" in result.output

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version_short_flag(self):
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("lookup", "insurance", "config", "sources"):
            assert command in result.output

    def test_lookup_help(self):
        result = runner.invoke(app, ["lookup", "--help"])
        assert result.exit_code == 0
        assert "--json" in result.output
        assert "--no-scrape" in result.output


class TestSourcesCommand:
    def test_lists_sources(self, isolated_config):
        result = runner.invoke(app, ["sources"])
        assert result.exit_code == 0
        assert "Data sources" in result.output
        assert "gov.im" in result.output


class TestConfigCommand:
    def test_show_unconfigured(self, isolated_config):
        result = runner.invoke(app, ["config", "--show"])
        assert result.exit_code == 0
        assert "Not set" in result.output
        assert "sample data" in result.output

    def test_show_masks_secrets(self, isolated_config):
        isolated_config.save(Settings(dvla_api_key="abcdef123456"))

        result = runner.invoke(app, ["config", "--show"])

        assert result.exit_code == 0
        assert "abcdef123456" not in result.output
        assert "3456" in result.output

    def test_invalid_config_exits(self, isolated_config):
        isolated_config.config_path.write_text("not = [valid", encoding="utf-8")
        result = runner.invoke(app, ["config", "--show"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_reset_cancelled(self, isolated_config):
        isolated_config.save(Settings())
        result = runner.invoke(app, ["config", "--reset"], input="n\n")
        assert result.exit_code == 0
        assert isolated_config.exists

    def test_reset_confirmed(self, isolated_config):
        isolated_config.save(Settings(dvla_api_key="abcdef123456"))
        result = runner.invoke(app, ["config", "--reset"], input="y\n")
        assert result.exit_code == 0
        assert not isolated_config.exists
        assert isolated_config.load().dvla_api_key is None
