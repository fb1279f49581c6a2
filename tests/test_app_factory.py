"""Tests for application construction."""

import logging

import httpx
import pytest

from app.core import app_factory
from app.core.app_factory import create_app


@pytest.fixture(autouse=True)
def keep_caplog_handler(monkeypatch: pytest.MonkeyPatch):
    # configure_logging replaces root handlers, which would detach caplog
    monkeypatch.setattr(app_factory, "configure_logging", lambda *_: None)


def test_warns_when_google_credentials_missing(make_settings, caplog):
    caplog.set_level(logging.WARNING, logger="app.core.app_factory")

    create_app(
        make_settings("google", google_api_key=None, google_cx=None),
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
    )

    warnings = [
        r for r in caplog.records
        if r.getMessage() == "config.google_credentials_missing"
    ]
    assert len(warnings) == 1
    assert warnings[0].levelno == logging.WARNING


def test_no_warning_when_google_credentials_present(make_settings, caplog):
    caplog.set_level(logging.WARNING, logger="app.core.app_factory")

    create_app(
        make_settings("google", google_api_key="key-1", google_cx="cx-1"),
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
    )

    assert not any(
        r.getMessage() == "config.google_credentials_missing" for r in caplog.records
    )
