"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability.

    Details are logged, never rendered into the response envelope.
    """

    hint: str
    http_status: int
    upstream_status: int
    asset: str
    field: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable context message (envelope ``message``).
        error: Human-readable failure detail (envelope ``error``).
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    error: str | None = None
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.error or self.message)


class ValidationAppError(AppError):
    """Raised when request input validation fails."""


class RateLimitAppError(AppError):
    """Raised when a client key has exhausted its request quota."""


class MarketDataAppError(AppError):
    """Raised when the market data provider call fails."""
