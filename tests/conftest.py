"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It sets TESTING so no .env file is loaded, and resets the process-wide
rate limiter between tests so quotas never leak across test cases.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["TESTING"] = "true"
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("APP_RATE_LIMIT_REQUESTS", "100")
os.environ.setdefault("APP_RATE_LIMIT_WINDOW_MS", "60000")
os.environ.setdefault("MARKET_CACHE_TTL_SECONDS", "0")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest

from app.core.config import settings
from app.core.rate_limit import reset_rate_limiter


@pytest.fixture(autouse=True)
def _fresh_rate_limiter():
    """Give every test an empty limiter and restore rate limit settings."""
    saved = (
        settings.app.rate_limit_enabled,
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_ms,
    )
    reset_rate_limiter()
    yield
    (
        settings.app.rate_limit_enabled,
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_ms,
    ) = saved
    reset_rate_limiter()
