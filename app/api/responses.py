"""Helpers shared by route handlers to emit envelope responses."""

from __future__ import annotations

import logging
from typing import Any

from fastapi.responses import JSONResponse

from app.core.errors import AppError
from app.schemas.envelope import create_api_response, envelope_response

logger = logging.getLogger(__name__)


def ok(data: Any, message: str) -> JSONResponse:
    """200 response with ``create_api_response(data, True, message)``."""
    return envelope_response(create_api_response(data, True, message))


def failed(message: str, error: str, status_code: int = 500) -> JSONResponse:
    """Failure envelope with ``data=None`` and the given status."""
    return envelope_response(
        create_api_response(None, False, message, error),
        status_code=status_code,
    )


def fetch_failed(context: str, exc: Exception) -> JSONResponse:
    """500 envelope for a failed data fetch.

    Args:
        context: What the route was doing (e.g., "Failed to fetch news").
        exc: The error raised by the service or adapter.
    """
    if isinstance(exc, AppError):
        detail = exc.error or exc.message
    else:
        detail = str(exc) or "Unknown error"

    logger.error(
        "route.fetch_failed",
        extra={
            "context": context,
            "error_type": type(exc).__name__,
            "error_code": getattr(exc, "code", None),
        },
    )
    return failed(context, detail, status_code=500)
