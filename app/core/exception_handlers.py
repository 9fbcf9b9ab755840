"""Global exception handlers for consistent error envelopes.

This module provides FastAPI exception handlers that intercept all errors
(domain, framework and unexpected) and return the standard response envelope
with a proper HTTP status code.

Design:
- AppError subclasses → appropriate HTTP status (400, 429, 500)
- HTTPException → its own status, detail as the envelope error
- Request validation errors → 400
- Unexpected Exception → generic 500 (safety net, no detail leaked)
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AppError, MarketDataAppError, RateLimitAppError
from app.core.logging import get_request_id
from app.schemas.envelope import create_api_response, envelope_response

logger = logging.getLogger(__name__)


def _status_for(exc: AppError) -> int:
    if isinstance(exc, RateLimitAppError):
        return 429
    if isinstance(exc, MarketDataAppError):
        return 500
    return 400


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors with the failure envelope.

    Routes domain errors to appropriate HTTP status codes:
    - ValidationAppError → 400 Bad Request (client fault)
    - RateLimitAppError → 429 Too Many Requests
    - MarketDataAppError → 500 Internal Server Error (upstream fault)

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse carrying ``create_api_response(None, False, message, error)``.
    """
    status_code = _status_for(exc)

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
            "request_path": request.url.path,
            "request_id": get_request_id(),
        },
    )

    envelope = create_api_response(None, False, exc.message, exc.error or exc.message)
    return envelope_response(envelope, status_code=status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (404, 405, ...) as failure envelopes."""
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
    envelope = create_api_response(None, False, detail, detail)
    return envelope_response(
        envelope,
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 400 envelopes.

    The first error location and message become the envelope error detail.
    """
    errors = exc.errors()
    detail = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", detail)

    logger.info(
        "request_validation_failed",
        extra={
            "request_path": request.url.path,
            "error_count": len(errors),
            "request_id": get_request_id(),
        },
    )

    envelope = create_api_response(None, False, "Invalid request", detail)
    return envelope_response(envelope, status_code=400)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Logs detailed information for debugging while returning a generic message.
    Prevents information leakage (no stack traces to client).

    Args:
        request: FastAPI request object.
        exc: Exception instance (unexpected).

    Returns:
        JSONResponse with a generic failure envelope.
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

    envelope = create_api_response(
        None,
        False,
        "Internal server error",
        "An unexpected error occurred. Please try again later.",
    )
    return envelope_response(envelope, status_code=500)


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with FastAPI app.

    Must be called during app initialization, before route registration.

    Args:
        app: FastAPI application instance.
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(Exception)(general_exception_handler)
