"""Global exception handlers for consistent error responses.

This module provides FastAPI exception handlers that intercept all errors
(domain and unexpected) and return JSON responses of the form
``{"error": "<message>"}``.

Design:
- AppError subclasses → their declared HTTP status (400, 429, 500, 502)
- UpstreamStatusError → upstream status and body relayed verbatim
- Unexpected Exception → generic 500 (safety net)
"""

import logging

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from app.core.errors import AppError, UpstreamStatusError
from app.core.logging import get_request_id

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors.

    The status code comes from the error class (``AppError.status_code``);
    ``exc.details`` is logged but never sent to the client.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with the mapped status code and ``{"error": message}``.
    """
    status_code = exc.status_code

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "details": exc.details,
            "request_path": request.url.path,
            "request_id": get_request_id(),
        },
    )

    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message},
        headers=exc.headers,
    )


async def upstream_status_handler(request: Request, exc: UpstreamStatusError) -> Response:
    """Relay a non-success upstream response to the caller unchanged."""
    logger.warning(
        "upstream_status_relayed",
        extra={
            "status_code": exc.status_code,
            "request_path": request.url.path,
            "request_id": get_request_id(),
        },
    )
    return Response(
        content=exc.body,
        status_code=exc.status_code,
        media_type=exc.content_type,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Logs detailed information for debugging while returning a generic
    message. No stack traces or exception text reach the client.

    Args:
        request: FastAPI request object.
        exc: Exception instance (unexpected).

    Returns:
        JSONResponse with generic error.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
    )

    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error"},
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.

    Example:
        >>> from fastapi import FastAPI
        >>> from app.core.exception_handlers import setup_exception_handlers
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(UpstreamStatusError)(upstream_status_handler)
    app.exception_handler(Exception)(general_exception_handler)
