"""Uniform response envelope shared by every data route.

Every endpoint body has the same shape::

    {"data": ..., "success": bool, "message"?: str, "error"?: str, "timestamp": ISO-8601}

``message`` and ``error`` are omitted when unset; ``data`` is always present.
Pairing ``success=False`` with an ``error`` and a non-2xx status is a caller
discipline; the builder does not enforce it.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field


class ApiResponse(BaseModel):
    """Immutable success/failure wrapper with a construction timestamp."""

    model_config = ConfigDict(frozen=True)

    data: Any = Field(None, description="Payload of any shape, or null.")
    success: bool = Field(True, description="Whether the request succeeded.")
    message: str | None = Field(None, description="Human-readable context message.")
    error: str | None = Field(None, description="Failure detail, set only on failure.")
    timestamp: datetime = Field(..., description="Instant the envelope was built (UTC).")

    def to_content(self) -> dict[str, Any]:
        """Render the envelope into JSON-safe content for the wire."""

        content = jsonable_encoder(self)
        for optional_key in ("message", "error"):
            if content.get(optional_key) is None:
                content.pop(optional_key, None)
        return content


def create_api_response(
    data: Any,
    success: bool = True,
    message: str | None = None,
    error: str | None = None,
) -> ApiResponse:
    """Wrap a payload in the uniform response envelope.

    Args:
        data: Payload (any shape, including None).
        success: Whether the operation succeeded.
        message: Optional human-readable message.
        error: Optional failure detail.

    Returns:
        ApiResponse stamped with the current UTC instant.
    """

    return ApiResponse(
        data=data,
        success=success,
        message=message,
        error=error,
        timestamp=datetime.now(timezone.utc),
    )


def envelope_response(
    envelope: ApiResponse,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=envelope.to_content(),
        headers=headers,
    )
