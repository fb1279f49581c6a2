"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from app.core.config import AppSettings, SearchSettings


def test_defaults():
    search = SearchSettings(google_api_key=None, google_cx=None)
    app = AppSettings()

    assert search.provider == "duckduckgo"
    assert search.timeout_seconds == 8.0
    assert search.google_configured is False
    assert app.cache_ttl_seconds == 60
    assert app.rate_limit_requests == 60
    assert app.rate_limit_window_seconds == 60


def test_port_read_from_plain_port_variable(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PORT", "8080")

    assert AppSettings().port == 8080


def test_port_defaults_to_3000(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("APP_PORT", raising=False)

    assert AppSettings().port == 3000


def test_google_credentials_from_unprefixed_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SEARCH_PROVIDER", "google")
    monkeypatch.setenv("GOOGLE_API_KEY", "AIza-test")
    monkeypatch.setenv("GOOGLE_CX", "engine-1")

    search = SearchSettings()

    assert search.provider == "google"
    assert search.google_api_key == "AIza-test"
    assert search.google_cx == "engine-1"
    assert search.google_configured is True


def test_unknown_provider_is_rejected(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SEARCH_PROVIDER", "bing")

    with pytest.raises(ValidationError):
        SearchSettings()
