"""Google Custom Search JSON API client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.adapters.search.base import AbstractSearchClient
from app.core.errors import ConfigurationAppError, UpstreamStatusError

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Server not configured"


class GoogleSearchClient(AbstractSearchClient):
    """Client for Google Custom Search.

    Requires an API key and a Programmable Search Engine id. Non-2xx answers
    are relayed to the caller with the upstream status code and body.
    """

    provider = "google"

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None,
        cx: str | None,
        timeout_seconds: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout_seconds=timeout_seconds, transport=transport)
        self._api_key = api_key
        self._cx = cx

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._cx)

    def ensure_configured(self) -> None:
        """Raise before any outbound call when credentials are missing.

        Raises:
            ConfigurationAppError: If the API key or engine id is absent.
        """
        if not self.configured:
            raise ConfigurationAppError(
                code="google_not_configured",
                message=NOT_CONFIGURED_MESSAGE,
                details={
                    "provider": self.provider,
                    "hint": "Set GOOGLE_API_KEY and GOOGLE_CX",
                },
            )

    async def fetch(self, query: str, *, start: int = 1, **params: Any) -> dict[str, Any]:
        """Fetch one page of results.

        Args:
            query: Search text.
            start: 1-based index of the first result to return.

        Raises:
            ConfigurationAppError: If credentials are missing.
            UpstreamStatusError: If Google answers with a non-2xx status.
            UpstreamAppError: On transport failure or invalid JSON.
        """
        self.ensure_configured()
        response = await self._get(
            {
                "key": self._api_key,
                "cx": self._cx,
                "q": query,
                "start": start,
            }
        )
        if not response.is_success:
            logger.warning(
                "upstream.bad_status",
                extra={"provider": self.provider, "status": response.status_code},
            )
            raise UpstreamStatusError(
                response.status_code,
                response.content,
                response.headers.get("content-type"),
            )
        return self._decode(response)
