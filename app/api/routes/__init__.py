from __future__ import annotations

from app.api.routes.alerts import router as alerts_router
from app.api.routes.frame import router as frame_router
from app.api.routes.health import router as health_router
from app.api.routes.market import router as market_router
from app.api.routes.news import router as news_router
from app.api.routes.portfolio import router as portfolio_router

__all__ = [
    "alerts_router",
    "frame_router",
    "health_router",
    "market_router",
    "news_router",
    "portfolio_router",
]
