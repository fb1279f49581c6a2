"""DuckDuckGo Instant Answer API client."""

from __future__ import annotations

import logging
from typing import Any

from app.adapters.search.base import AbstractSearchClient

logger = logging.getLogger(__name__)


class DuckDuckGoClient(AbstractSearchClient):
    """Client for the public DuckDuckGo Instant Answer API.

    No credentials are needed. Any non-2xx answer is treated as an upstream
    failure (HTTP 502 to the caller).
    """

    provider = "ddg"

    async def fetch(self, query: str, **params: Any) -> dict[str, Any]:
        response = await self._get(
            {
                "q": query,
                "format": "json",
                "no_html": "1",
                "skip_disambig": "1",
            }
        )
        if not response.is_success:
            logger.error(
                "upstream.bad_status",
                extra={"provider": self.provider, "status": response.status_code},
            )
            raise self._failure("upstream_bad_status")
        return self._decode(response)
