"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any ``app`` import so the global
settings never pick up a developer's .env file or real credentials.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.pop("GOOGLE_API_KEY", None)
os.environ.pop("GOOGLE_CX", None)
os.environ.setdefault("SEARCH_PROVIDER", "duckduckgo")

from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.app_factory import create_app
from app.core.config import AppSettings, SearchSettings, Settings


class UpstreamRecorder:
    """httpx handler that records requests and replies with a canned response."""

    def __init__(
        self,
        json_body: Any = None,
        status_code: int = 200,
        *,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        exc: Exception | None = None,
    ) -> None:
        self.json_body = json_body if json_body is not None else {}
        self.status_code = status_code
        self.content = content
        self.headers = headers
        self.exc = exc
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.content is not None:
            return httpx.Response(
                self.status_code, content=self.content, headers=self.headers
            )
        return httpx.Response(self.status_code, json=self.json_body, headers=self.headers)


DDG_PAYLOAD = {
    "Heading": "Python",
    "Abstract": "Python is a programming language.",
    "AbstractSource": "Wikipedia",
    "AbstractURL": "https://en.wikipedia.org/wiki/Python_(programming_language)",
    "RelatedTopics": [
        {"Text": "CPython", "FirstURL": "https://duckduckgo.com/CPython"},
        {
            "Name": "Implementations",
            "Topics": [
                {"Text": "PyPy", "FirstURL": "https://duckduckgo.com/PyPy"},
                {"Text": "Jython"},
            ],
        },
    ],
}


@pytest.fixture
def ddg_payload() -> dict[str, Any]:
    return DDG_PAYLOAD


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(provider: str = "duckduckgo", *, app: AppSettings | None = None, **search: Any) -> Settings:
        return Settings(
            search=SearchSettings(provider=provider, **search),
            app=app or AppSettings(),
        )

    return _make


@pytest.fixture
def make_client(make_settings) -> Callable[..., TestClient]:
    """Build a TestClient around a fresh app whose upstream is ``recorder``."""

    def _make(
        recorder: UpstreamRecorder,
        provider: str = "duckduckgo",
        *,
        app: AppSettings | None = None,
        **search: Any,
    ) -> TestClient:
        config = make_settings(provider, app=app, **search)
        application = create_app(config, transport=httpx.MockTransport(recorder))
        return TestClient(application)

    return _make


@pytest.fixture
def make_recorder() -> Callable[..., UpstreamRecorder]:
    return UpstreamRecorder
