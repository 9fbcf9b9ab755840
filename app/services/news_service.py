"""Static crypto news feed (no upstream news provider is wired yet)."""

from __future__ import annotations

from datetime import datetime, timezone

from app.core.errors import ValidationAppError
from app.schemas.news import NewsItem, NewsSource

_HEADLINES: tuple[tuple[str, str, str], ...] = (
    (
        "Bitcoin Reaches New All-Time High",
        "Bitcoin surpasses previous records amid institutional adoption.",
        "CryptoNews",
    ),
    (
        "Ethereum 2.0 Upgrade Shows Promise",
        "The latest Ethereum upgrade demonstrates improved scalability.",
        "BlockchainToday",
    ),
)


class NewsService:
    async def latest(self, limit: int = 10) -> list[NewsItem]:
        if limit < 0:
            raise ValidationAppError(
                code="invalid_limit",
                message="Invalid limit",
                error="limit must be a non-negative integer",
                details={"field": "limit"},
            )

        now = datetime.now(timezone.utc)
        items = [
            NewsItem(
                title=title,
                description=description,
                url="#",
                published_at=now,
                source=NewsSource(name=source),
            )
            for title, description, source in _HEADLINES
        ]
        return items[:limit]
