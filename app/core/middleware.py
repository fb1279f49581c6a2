"""HTTP middleware: CORS and request ID propagation.

The request ID middleware:
- Accepts an incoming X-Request-ID header or generates a UUID
- Stores request_id in contextvars for log correlation
- Echoes request_id and the request duration in response headers

Usage:
    setup_middleware(app, settings.log)
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import LogSettings, settings
from app.core.exception_handlers import general_exception_handler
from app.core.logging import clear_request_id, set_request_id

logger = logging.getLogger(__name__)


async def request_id_middleware(request: Request, call_next) -> Response:
    """Attach a correlation id and timing header to every request/response.

    If the client provides the configured request id header (default
    ``X-Request-ID``) that value is reused, otherwise a UUID4 is generated.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: The downstream response with ``X-Request-ID`` and
            ``X-Request-Duration-ms`` headers added.
    """

    header_name = request.app.state.settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        try:
            response: Response = await call_next(request)
        except Exception as exc:
            # Unhandled errors are rendered inside the CORS and request id layers
            response = await general_exception_handler(request, exc)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "http.request",
            extra={
                "method": request.method,
                "route": request.url.path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
    finally:
        clear_request_id()

    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


def setup_middleware(app: FastAPI, log_settings: LogSettings | None = None) -> None:
    """Install CORS (all origins) and request id middleware on ``app``.

    CORS is added last so it wraps the request id middleware and also
    decorates preflight and error responses.
    """

    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[(log_settings or settings.log).request_id_header],
    )
