"""Tests for config module."""

from poe2_gems.config import Settings, reload_settings


def test_settings_defaults():
    settings = Settings()

    assert settings.wiki_api_url == "https://www.poe2wiki.net/w/api.php"
    assert settings.api_timeout == 30.0
    assert settings.cache_ttl == 3600.0
    assert settings.support_query_limit == 15
    assert settings.raw_excerpt_length == 1000
    assert settings.log_level == "INFO"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("POE2_API_TIMEOUT", "60.0")
    monkeypatch.setenv("POE2_CACHE_TTL", "120")
    monkeypatch.setenv("POE2_WIKI_API_URL", "http://localhost:8080/api.php")
    monkeypatch.setenv("POE2_LOG_LEVEL", "DEBUG")

    settings = reload_settings()

    assert settings.api_timeout == 60.0
    assert settings.cache_ttl == 120.0
    assert settings.wiki_api_url == "http://localhost:8080/api.php"
    assert settings.log_level == "DEBUG"

    monkeypatch.undo()
    reload_settings()


def test_settings_ignores_extra_env_vars(monkeypatch):
    monkeypatch.setenv("POE2_UNKNOWN_VAR", "value")

    settings = reload_settings()

    assert not hasattr(settings, "unknown_var")
