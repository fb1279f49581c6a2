"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses. Each error class
carries the HTTP status it maps to; the message is the exact text returned
to the client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for server-side observability.

    Never rendered to clients.
    """

    hint: str
    http_status: int
    retry_after: float
    provider: str
    upstream_host: str
    error_type: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code (logged, not returned).
        message: Human-readable error message returned to the client.
        details: Optional structured details for debugging/observability.
        headers: Optional extra response headers.
    """

    code: str
    message: str
    details: ErrorDetails | None = None
    headers: dict[str, str] | None = None

    status_code: ClassVar[int] = 400

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when client input validation fails."""

    status_code: ClassVar[int] = 400


class RateLimitAppError(AppError):
    """Raised when a client exceeds its request budget."""

    status_code: ClassVar[int] = 429


class ConfigurationAppError(AppError):
    """Raised when the server lacks configuration required to serve a request."""

    status_code: ClassVar[int] = 500


class UpstreamAppError(AppError):
    """Raised when the upstream search API cannot be reached or parsed."""

    status_code: ClassVar[int] = 502


class UpstreamStatusError(Exception):
    """Upstream answered with a non-success status that is relayed verbatim.

    Attributes:
        status_code: Upstream HTTP status.
        body: Raw upstream response body.
        content_type: Upstream Content-Type header (JSON assumed when absent).
    """

    def __init__(
        self,
        status_code: int,
        body: bytes,
        content_type: str | None = None,
    ) -> None:
        super().__init__(f"Upstream returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body
        self.content_type = content_type or "application/json"
