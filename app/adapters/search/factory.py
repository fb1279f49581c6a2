"""Factory for the configured upstream search client."""

import httpx

from app.adapters.search.base import AbstractSearchClient
from app.adapters.search.duckduckgo_client import DuckDuckGoClient
from app.adapters.search.google_client import GoogleSearchClient
from app.core.config import SearchSettings


def create_search_client(
    search_settings: SearchSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AbstractSearchClient:
    """Instantiate the search client selected by ``search_settings.provider``.

    Missing Google credentials do not fail here; the client rejects each
    request instead so the service can still start.

    Raises:
        ValueError: If the provider is unknown.
    """
    provider = search_settings.provider.lower()

    if provider == "duckduckgo":
        return DuckDuckGoClient(
            search_settings.duckduckgo_url,
            timeout_seconds=search_settings.timeout_seconds,
            transport=transport,
        )

    if provider == "google":
        return GoogleSearchClient(
            search_settings.google_url,
            api_key=search_settings.google_api_key,
            cx=search_settings.google_cx,
            timeout_seconds=search_settings.timeout_seconds,
            transport=transport,
        )

    raise ValueError(
        f"Unknown search provider: '{provider}'. Supported providers: duckduckgo, google"
    )
