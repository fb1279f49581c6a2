"""``GET /search`` for each upstream variant.

Only one of the two routers is mounted, depending on ``SEARCH_PROVIDER``.
"""

from __future__ import annotations

from fastapi import APIRouter, Query, Request

from app.adapters.search.google_client import GoogleSearchClient
from app.core.errors import ValidationAppError
from app.core.rate_limit import enforce_rate_limit
from app.schemas.search import InstantAnswerResponse, WebSearchResponse
from app.services.search_service import SearchService

duckduckgo_router = APIRouter(tags=["Search"])
google_router = APIRouter(tags=["Search"])


def require_query(q: str | None) -> str:
    """Return the trimmed query or raise a 400 when it is blank.

    Raises:
        ValidationAppError: If ``q`` is missing, empty or whitespace only.
    """
    query = (q or "").strip()
    if not query:
        raise ValidationAppError(code="missing_query", message="Missing q")
    return query


def parse_start(start: str | None) -> int:
    """Parse the 1-based pagination index, falling back to 1."""
    try:
        value = int(start) if start is not None else 1
    except ValueError:
        return 1
    return value if value >= 1 else 1


def _service(request: Request) -> SearchService:
    return request.app.state.search_service


@duckduckgo_router.get(
    "/search",
    response_model=InstantAnswerResponse,
    summary="Instant answer search (DuckDuckGo)",
)
async def search_instant_answer(
    request: Request,
    q: str | None = Query(None, description="Search text"),
):
    """Proxy a query to DuckDuckGo's Instant Answer API.

    Steps: validate ``q`` → rate limit → cache lookup → upstream →
    normalize → cache store.

    Raises:
        ValidationAppError: 400 when ``q`` is blank.
        RateLimitAppError: 429 when the client exceeded its budget.
        UpstreamAppError: 502 when DuckDuckGo fails or returns bad data.
    """
    query = require_query(q)
    enforce_rate_limit(request)
    return await _service(request).search(query)


@google_router.get(
    "/search",
    response_model=WebSearchResponse,
    summary="Web search (Google Custom Search)",
)
async def search_web(
    request: Request,
    q: str | None = Query(None, description="Search text"),
    start: str | None = Query(None, description="1-based index of the first result"),
):
    """Proxy a query to Google Custom Search.

    Raises:
        ValidationAppError: 400 when ``q`` is blank.
        ConfigurationAppError: 500 when Google credentials are missing.
        UpstreamStatusError: Google's own status/body on non-2xx answers.
        UpstreamAppError: 502 on transport failure or invalid JSON.
    """
    query = require_query(q)
    service = _service(request)
    client = service.client
    if isinstance(client, GoogleSearchClient):
        client.ensure_configured()
    return await service.search(query, start=parse_start(start))
