"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) to
improve testability and keep ``app.main`` trivial.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import (
    alerts_router,
    frame_router,
    health_router,
    market_router,
    news_router,
    portfolio_router,
)
from app.api.routes import market as market_routes
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware
from app.core.openapi import apply_openapi_customizations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "app.startup",
        extra={
            "app_env": settings.app_env,
            "rate_limit_enabled": settings.app.rate_limit_enabled,
            "rate_limit_requests": settings.app.rate_limit_requests,
            "rate_limit_window_ms": settings.app.rate_limit_window_ms,
        },
    )
    market_routes.open_market_client()
    try:
        yield
    finally:
        await market_routes.close_market_client()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="CryptoTrend API",
        description=(
            "Backend for the CryptoTrend dashboard: market prices from CoinGecko, "
            "a mock portfolio, mock price alerts, static news and a social frame "
            "surface. Every data route answers with the same envelope "
            "(data, success, message, error, timestamp) and is rate limited per client."
        ),
        version="0.1.0",
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
        lifespan=lifespan,
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(market_router, prefix="/v1")
    app.include_router(portfolio_router, prefix="/v1")
    app.include_router(alerts_router, prefix="/v1")
    app.include_router(news_router, prefix="/v1")
    app.include_router(frame_router, prefix="/v1")
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
