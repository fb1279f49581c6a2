from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request) -> dict:
    """Liveness check.

    Returns:
        dict: ``status`` is always "ok"; ``provider`` names the upstream
            search API this instance proxies.
    """

    return {"status": "ok", "provider": request.app.state.settings.search.provider}
