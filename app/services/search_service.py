"""Search service orchestrating cache, upstream client and normalization.

Per request:
- Cache lookup (when a cache is configured)
- One upstream call on a miss
- Normalization into the response schema
- Cache store
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from pydantic import BaseModel

from app.adapters.search.base import UPSTREAM_FAILED_MESSAGE, AbstractSearchClient
from app.core.errors import UpstreamAppError
from app.utils.simple_cache import SimpleTTLCache, build_cache_key

logger = logging.getLogger(__name__)

Normalizer = Callable[[str, dict[str, Any]], BaseModel]


class SearchService:
    """Serve normalized search results for one upstream provider.

    Attributes:
        client: Upstream search client.
        normalize: Pure function mapping ``(query, upstream_json)`` to a schema.
        cache: Optional TTL cache keyed by ``<provider>:<query>``.
    """

    def __init__(
        self,
        client: AbstractSearchClient,
        normalize: Normalizer,
        cache: SimpleTTLCache | None = None,
    ) -> None:
        self.client = client
        self.normalize = normalize
        self.cache = cache

    def cache_key(self, query: str) -> str:
        return build_cache_key(self.client.provider, query)

    def _normalize(self, query: str, data: dict[str, Any]) -> BaseModel:
        try:
            return self.normalize(query, data)
        except (TypeError, ValueError, AttributeError) as exc:
            # pydantic.ValidationError is a ValueError
            logger.exception(
                "upstream.normalize_failed",
                extra={"provider": self.client.provider, "error_type": type(exc).__name__},
            )
            raise UpstreamAppError(
                code="upstream_unexpected_payload",
                message=UPSTREAM_FAILED_MESSAGE,
                details={"provider": self.client.provider, "error_type": type(exc).__name__},
            ) from exc

    async def search(self, query: str, **params: Any) -> BaseModel:
        """Return the normalized result for ``query``.

        Args:
            query: Trimmed, non-empty query text.
            **params: Provider-specific upstream parameters (e.g. ``start``).

        Returns:
            The normalized response model (possibly served from cache).

        Raises:
            UpstreamAppError: If the upstream call or normalization fails.
            UpstreamStatusError: If the provider relays upstream error statuses.
        """
        key = self.cache_key(query)

        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        data = await self.client.fetch(query, **params)
        result = self._normalize(query, data)

        if self.cache is not None:
            self.cache.set(key, result)

        logger.info(
            "search.completed",
            extra={"provider": self.client.provider, "cached": False},
        )
        return result
