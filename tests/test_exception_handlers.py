"""Tests for global exception handlers.

Validates that every error type maps to its HTTP status with a
``{"error": "<message>"}`` body and that nothing internal leaks.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.errors import (
    AppError,
    ConfigurationAppError,
    RateLimitAppError,
    UpstreamAppError,
    UpstreamStatusError,
    ValidationAppError,
)
from app.core.exception_handlers import setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers)


class TestAppErrorHandler:
    """Test handler for AppError and subclasses."""

    @pytest.mark.parametrize(
        ("error_cls", "message", "status_code"),
        [
            (ValidationAppError, "Missing q", 400),
            (RateLimitAppError, "Too Many Requests", 429),
            (ConfigurationAppError, "Server not configured", 500),
            (UpstreamAppError, "Upstream fetch failed", 502),
        ],
    )
    def test_error_maps_to_status_and_flat_body(
        self, client: TestClient, app_with_handlers: FastAPI, error_cls, message, status_code
    ):
        @app_with_handlers.get("/boom")
        async def boom():
            raise error_cls(code="test_code", message=message)

        response = client.get("/boom")

        assert response.status_code == status_code
        assert response.json() == {"error": message}

    def test_details_are_not_rendered(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/details")
        async def details():
            raise UpstreamAppError(
                code="upstream_timeout",
                message="Upstream fetch failed",
                details={"provider": "ddg", "error_type": "ReadTimeout"},
            )

        response = client.get("/details")

        assert response.status_code == 502
        assert "ReadTimeout" not in response.text
        assert "upstream_timeout" not in response.text

    def test_error_headers_are_forwarded(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/throttled")
        async def throttled():
            raise RateLimitAppError(
                code="rate_limit_exceeded",
                message="Too Many Requests",
                headers={"Retry-After": "12"},
            )

        response = client.get("/throttled")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "12"


class TestUpstreamStatusHandler:
    def test_upstream_status_and_body_are_relayed_verbatim(
        self, client: TestClient, app_with_handlers: FastAPI
    ):
        body = b'{"error": {"code": 403, "message": "API key not valid"}}'

        @app_with_handlers.get("/relay")
        async def relay():
            raise UpstreamStatusError(403, body, "application/json; charset=UTF-8")

        response = client.get("/relay")

        assert response.status_code == 403
        assert response.content == body


class TestGeneralExceptionHandler:
    """Test fallback handler for unexpected exceptions."""

    def test_unexpected_exception_handler_registered(self, app_with_handlers: FastAPI):
        assert Exception in app_with_handlers.exception_handlers

    def test_general_exception_handler_hides_error_text(self):
        from app.core.exception_handlers import general_exception_handler

        request = AsyncMock()
        request.url.path = "/search"
        request.method = "GET"

        exc = RuntimeError("connection pool exhausted")
        response = asyncio.run(general_exception_handler(request, exc))

        data = json.loads(bytes(response.body).decode())
        assert response.status_code == 500
        assert data == {"error": "Internal Server Error"}
        assert "connection pool" not in bytes(response.body).decode()
        assert "RuntimeError" not in bytes(response.body).decode()


def test_setup_exception_handlers_registers_handlers(app_with_handlers: FastAPI):
    assert AppError in app_with_handlers.exception_handlers
    assert UpstreamStatusError in app_with_handlers.exception_handlers
    assert Exception in app_with_handlers.exception_handlers


def test_app_error_str_is_message():
    err = ValidationAppError(code="missing_query", message="Missing q")
    assert str(err) == "Missing q"
    assert err.status_code == 400
