"""Upstream search adapters - one client per search API."""

from app.adapters.search.base import AbstractSearchClient
from app.adapters.search.duckduckgo_client import DuckDuckGoClient
from app.adapters.search.factory import create_search_client
from app.adapters.search.google_client import GoogleSearchClient

__all__ = [
    "AbstractSearchClient",
    "DuckDuckGoClient",
    "GoogleSearchClient",
    "create_search_client",
]
