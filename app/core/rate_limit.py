"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Design goals:
- Minimal coupling: API routes depend on a dependency function only.
- Swap-friendly: storage backend can be replaced (e.g., Redis) behind an
  abstract interface.

Rate limiting strategy:
- Sliding-window limit per client key.
- Client key is the first X-Forwarded-For hop, then X-Real-IP, then the
  socket peer. Requests with none of these share the "anonymous" bucket.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import Request

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from app.core.config import settings
from app.core.errors import RateLimitAppError

logger = logging.getLogger(__name__)

ANONYMOUS_CLIENT_KEY = "anonymous"

_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, int, int | None] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.

    Returns:
        AbstractRateLimiter: Configured limiter instance.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_ms,
        settings.app.rate_limit_max_keys,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = InMemorySlidingWindowRateLimiter(
            limit=settings.app.rate_limit_requests,
            window_ms=settings.app.rate_limit_window_ms,
            max_keys=settings.app.rate_limit_max_keys,
        )
        _limiter_config = config

    return _limiter


def reset_rate_limiter() -> None:
    """Drop the cached limiter so the next request starts from a clean slate."""

    global _limiter, _limiter_config
    _limiter = None
    _limiter_config = None


def resolve_client_key(request: Request) -> str:
    """Resolve the quota key for the current request.

    Args:
        request: FastAPI request.

    Returns:
        str: Client IP, or "anonymous" when none can be resolved.
    """

    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop

    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return ANONYMOUS_CLIENT_KEY


def _hash_client_key(key: str) -> str:
    """Hash the client key for logging without exposing addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency enforcing the per-client request quota.

    Args:
        request: FastAPI request.

    Raises:
        RateLimitAppError: Rendered as a 429 envelope by the global handler.
    """

    if not settings.app.rate_limit_enabled:
        return

    limiter = get_rate_limiter()
    key = resolve_client_key(request)

    if limiter.can_make_request(key):
        logger.debug(
            "rate_limit.allowed",
            extra={
                "key_hash": _hash_client_key(key),
                "limit": settings.app.rate_limit_requests,
                "window_ms": settings.app.rate_limit_window_ms,
            },
        )
        return

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": _hash_client_key(key),
            "anonymous": key == ANONYMOUS_CLIENT_KEY,
            "limit": settings.app.rate_limit_requests,
            "window_ms": settings.app.rate_limit_window_ms,
            "route": request.url.path,
        },
    )

    raise RateLimitAppError(
        code="rate_limit_exceeded",
        message="Rate limit exceeded",
        error="Too many requests",
    )
