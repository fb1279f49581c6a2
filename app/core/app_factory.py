"""Application factory for the search proxy.

Centralizes app construction (state, middleware, handlers, routers) so tests
can build isolated apps with their own settings and upstream transport.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from app.adapters.search.base import AbstractSearchClient
from app.adapters.search.factory import create_search_client
from app.api.routes import duckduckgo_router, google_router, health_router
from app.core.config import Settings, settings as default_settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.openapi import apply_openapi_customizations
from app.core.rate_limit import build_rate_limiter
from app.services.normalizer import normalize_instant_answer, normalize_web_search
from app.services.search_service import SearchService
from app.utils.simple_cache import SimpleTTLCache

logger = logging.getLogger(__name__)


def build_search_service(
    config: Settings,
    client: AbstractSearchClient,
) -> SearchService:
    """Wire the search service for the configured provider.

    The duckduckgo variant gets a TTL cache; the google variant does not.
    """
    if config.search.provider == "google":
        return SearchService(client=client, normalize=normalize_web_search)

    return SearchService(
        client=client,
        normalize=normalize_instant_answer,
        cache=SimpleTTLCache(ttl_seconds=config.app.cache_ttl_seconds),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg: Settings = app.state.settings
    logger.info(
        "app.startup",
        extra={"provider": cfg.search.provider, "port": cfg.app.port},
    )
    yield
    await app.state.search_client.aclose()


def create_app(
    config: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Process-scoped state (search client, cache, rate limiter) is built once
    here, stored on ``app.state`` and lives until the process exits.

    Args:
        config: Settings to use; defaults to the global settings.
        transport: Optional httpx transport for the upstream client (tests).

    Returns:
        Configured FastAPI app.
    """
    cfg = config or default_settings

    # Logging first so subsequent init logs are formatted as desired
    configure_logging(cfg.log)

    app = FastAPI(
        title="Search Proxy",
        description=(
            "Forwards search queries to DuckDuckGo Instant Answer or Google "
            "Custom Search and returns a compact, normalized JSON result."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    search_client = create_search_client(cfg.search, transport=transport)
    app.state.settings = cfg
    app.state.search_client = search_client
    app.state.search_service = build_search_service(cfg, search_client)
    if cfg.search.provider == "duckduckgo":
        app.state.rate_limiter = build_rate_limiter(cfg.app)

    if cfg.search.provider == "google" and not cfg.search.google_configured:
        logger.warning(
            "config.google_credentials_missing",
            extra={"hint": "Set GOOGLE_API_KEY and GOOGLE_CX; /search will return 500"},
        )

    setup_middleware(app, cfg.log)
    setup_exception_handlers(app)

    if cfg.search.provider == "google":
        app.include_router(google_router)
    else:
        app.include_router(duckduckgo_router)
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
