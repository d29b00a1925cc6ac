"""Unit tests for configuration management."""

import pytest

from danmaku_help.lib.config import HelpSettings, get_settings, reset_settings
from danmaku_help.lib.exceptions import ConfigError


class TestHelpSettings:
    """Tests for the HelpSettings class."""

    def test_default_values(self):
        """Defaults apply when no env vars are set."""
        settings = HelpSettings()

        assert settings.content_path is None
        assert settings.content_file is None
        assert settings.forum_db is None
        assert settings.system_author == "system"
        assert settings.verbose is False

    def test_env_var_override(self, monkeypatch, tmp_path):
        """Env vars override defaults."""
        monkeypatch.setenv("HELP_CONTENT_PATH", str(tmp_path / "help.json"))
        monkeypatch.setenv("HELP_FORUM_DB", str(tmp_path / "forum.db"))
        monkeypatch.setenv("HELP_SYSTEM_AUTHOR", "manual-bot")
        monkeypatch.setenv("HELP_VERBOSE", "true")

        settings = HelpSettings()

        assert settings.content_file == tmp_path / "help.json"
        assert settings.forum_db == str(tmp_path / "forum.db")
        assert settings.system_author == "manual-bot"
        assert settings.verbose is True

    def test_require_forum_db_missing(self):
        """Seeding without a database is a configuration error."""
        settings = HelpSettings()

        with pytest.raises(ConfigError) as exc:
            settings.require_forum_db()

        assert "HELP_FORUM_DB" in exc.value.message

    def test_require_forum_db_present(self, monkeypatch):
        """Configured database path is returned."""
        monkeypatch.setenv("HELP_FORUM_DB", "forum.db")

        assert HelpSettings().require_forum_db() == "forum.db"


class TestSettingsSingleton:
    """Tests for the lazy settings accessor."""

    def test_cached_instance(self):
        """get_settings returns the same instance until reset."""
        assert get_settings() is get_settings()

    def test_reset(self, monkeypatch):
        """reset_settings picks up new environment."""
        first = get_settings()
        monkeypatch.setenv("HELP_SYSTEM_AUTHOR", "other")

        reset_settings()

        assert get_settings() is not first
        assert get_settings().system_author == "other"
