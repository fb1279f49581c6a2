"""Upstream search client interface and shared HTTP plumbing."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from app.core.errors import UpstreamAppError
from app.core.logging import scrub_url

logger = logging.getLogger(__name__)

UPSTREAM_FAILED_MESSAGE = "Upstream fetch failed"


class AbstractSearchClient(ABC):
    """Interface for clients that fetch raw JSON from a search API.

    Each call issues exactly one outbound GET; there are no retries.

    Attributes:
        provider: Short provider name, also used as the cache namespace.
    """

    provider: str = ""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the underlying async HTTP client.

        Args:
            base_url: Upstream endpoint URL.
            timeout_seconds: Connect/read/write/pool timeout, enforced by httpx.
            transport: Optional transport override (used by tests).
        """
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
            headers={"Accept": "application/json"},
            follow_redirects=True,
        )

    @abstractmethod
    async def fetch(self, query: str, **params: Any) -> dict[str, Any]:
        """Fetch the upstream JSON object for ``query``.

        Raises:
            UpstreamAppError: On transport failure, timeout or invalid JSON.
        """
        ...

    async def aclose(self) -> None:
        await self._http.aclose()

    def _failure(self, code: str, exc: Exception | None = None) -> UpstreamAppError:
        details = {
            "provider": self.provider,
            "upstream_host": scrub_url(self.base_url),
        }
        if exc is not None:
            details["error_type"] = type(exc).__name__
        return UpstreamAppError(code=code, message=UPSTREAM_FAILED_MESSAGE, details=details)

    async def _get(self, params: dict[str, Any]) -> httpx.Response:
        try:
            response = await self._http.get(self.base_url, params=params)
        except httpx.TimeoutException as exc:
            logger.error(
                "upstream.timeout",
                extra={"provider": self.provider, "timeout_s": self.timeout_seconds},
            )
            raise self._failure("upstream_timeout", exc) from exc
        except httpx.HTTPError as exc:
            logger.error(
                "upstream.request_failed",
                extra={
                    "provider": self.provider,
                    "error_type": type(exc).__name__,
                    "error_msg": str(exc),
                },
            )
            raise self._failure("upstream_request_failed", exc) from exc

        logger.debug(
            "upstream.response",
            extra={"provider": self.provider, "status": response.status_code},
        )
        return response

    def _decode(self, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            logger.error(
                "upstream.invalid_json",
                extra={"provider": self.provider, "status": response.status_code},
            )
            raise self._failure("upstream_invalid_json", exc) from exc

        if not isinstance(data, dict):
            logger.error(
                "upstream.unexpected_payload",
                extra={"provider": self.provider, "payload_type": type(data).__name__},
            )
            raise self._failure("upstream_unexpected_payload")
        return data
