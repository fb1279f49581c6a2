from __future__ import annotations

from app.api.routes.health import router as health_router
from app.api.routes.search import duckduckgo_router, google_router

__all__ = ["duckduckgo_router", "google_router", "health_router"]
