"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Rate limiting strategy:
- Fixed-window limit per client.
- The client is identified by the ``X-Forwarded-For`` header value, falling
  back to the socket peer address, then to the constant ``"anon"``.
- The limiter instance is process-scoped and lives on ``app.state``.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import Request

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from app.core.config import AppSettings
from app.core.errors import RateLimitAppError

logger = logging.getLogger(__name__)

ANONYMOUS_CLIENT = "anon"


def build_rate_limiter(app_settings: AppSettings) -> AbstractRateLimiter:
    """Create the limiter used by the search route."""

    return InMemoryFixedWindowRateLimiter(
        limit=app_settings.rate_limit_requests,
        window_seconds=app_settings.rate_limit_window_seconds,
    )


def client_key(request: Request) -> str:
    """Identify the requesting client for rate limiting purposes."""

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded
    if request.client and request.client.host:
        return request.client.host
    return ANONYMOUS_CLIENT


def _hash_limiter_key(key: str) -> str:
    """Hash the client key for logging without exposing addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def enforce_rate_limit(request: Request) -> None:
    """Count the request against its client's budget.

    Does nothing when rate limiting is disabled in settings.

    Raises:
        RateLimitAppError: 429 Too Many Requests when the budget is exhausted.
    """

    app_settings: AppSettings = request.app.state.settings.app
    if not app_settings.rate_limit_enabled:
        return

    limiter: AbstractRateLimiter = request.app.state.rate_limiter
    key = client_key(request)
    result = limiter.consume(key)

    if result.allowed:
        logger.debug(
            "rate_limit.allowed",
            extra={
                "key_hash": _hash_limiter_key(key),
                "limit": result.limit,
                "remaining": result.remaining,
            },
        )
        return

    retry_after = result.retry_after_seconds or 0
    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": _hash_limiter_key(key),
            "limit": result.limit,
            "window_s": app_settings.rate_limit_window_seconds,
            "retry_after_s": retry_after,
        },
    )

    headers: dict[str, str] = {}
    if app_settings.rate_limit_include_headers:
        headers["Retry-After"] = str(retry_after)
        headers["X-RateLimit-Limit"] = str(result.limit)
        headers["X-RateLimit-Remaining"] = str(result.remaining)
        headers["X-RateLimit-Reset"] = str(result.reset_at)

    raise RateLimitAppError(
        code="rate_limit_exceeded",
        message="Too Many Requests",
        details={"retry_after": retry_after},
        headers=headers or None,
    )
