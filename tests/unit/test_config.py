"""Unit tests for Settings."""

import pytest
from pydantic import ValidationError

from generic_options.config import Settings, get_settings


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GENERIC_OPTIONS_LOG_LEVEL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.database_url == "sqlite:///./generic_options.db"
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.log_default_fallbacks is True
        assert settings.debug is False

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("GENERIC_OPTIONS_DATABASE_URL", "sqlite:///other.db")
        monkeypatch.setenv("GENERIC_OPTIONS_LOG_DEFAULT_FALLBACKS", "0")
        settings = Settings(_env_file=None)
        assert settings.database_url == "sqlite:///other.db"
        assert settings.log_default_fallbacks is False

    def test_log_level_is_uppercased(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_rejects_unknown_log_format(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")

    @pytest.mark.parametrize(
        "url",
        ["postgresql+asyncpg://u:p@db/opts", "sqlite+aiosqlite:///opts.db", "sqlite:///opts.db"],
    )
    def test_database_url_is_kept_verbatim(self, url):
        assert Settings(_env_file=None, database_url=url).database_url == url

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
