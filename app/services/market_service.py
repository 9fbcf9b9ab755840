"""Market data service: request normalization and response caching."""

from __future__ import annotations

import logging

from app.adapters.market.base import AbstractMarketDataClient
from app.core.errors import ValidationAppError
from app.schemas.market import MarketData, PriceHistory
from app.utils.simple_cache import SimpleTTLCache, build_cache_key

logger = logging.getLogger(__name__)

MAX_HISTORY_DAYS = 365


def parse_ids(raw_ids: str | None, default_ids: list[str]) -> list[str]:
    """Split a comma-separated ``ids`` query value.

    Empty segments are dropped; an absent or blank value yields ``default_ids``.
    """
    if not raw_ids:
        return list(default_ids)
    ids = [part.strip().lower() for part in raw_ids.split(",") if part.strip()]
    return ids or list(default_ids)


class MarketService:
    """Fetch quotes through a market client, memoizing results briefly.

    ``cache`` may be None to always hit the provider.
    """

    def __init__(
        self,
        client: AbstractMarketDataClient,
        cache: SimpleTTLCache | None = None,
        vs_currency: str = "usd",
    ) -> None:
        self._client = client
        self._cache = cache
        self._vs_currency = vs_currency

    @property
    def client(self) -> AbstractMarketDataClient:
        return self._client

    @client.setter
    def client(self, client: AbstractMarketDataClient) -> None:
        self._client = client

    async def get_market_data(self, ids: list[str]) -> list[MarketData]:
        key = build_cache_key("markets", self._vs_currency, sorted(ids))
        cached = self._cache.get(key) if self._cache else None
        if cached is not None:
            return cached

        data = await self._client.fetch_market_data(ids, self._vs_currency)
        if self._cache:
            self._cache.set(key, data)
        logger.info("market.fetched", extra={"asset_count": len(data), "kind": "markets"})
        return data

    async def get_trending(self) -> list[MarketData]:
        key = build_cache_key("trending", self._vs_currency)
        cached = self._cache.get(key) if self._cache else None
        if cached is not None:
            return cached

        data = await self._client.fetch_trending_coins()
        if self._cache:
            self._cache.set(key, data)
        logger.info("market.fetched", extra={"asset_count": len(data), "kind": "trending"})
        return data

    async def get_history(self, coin_id: str, days: int, vs_currency: str | None = None) -> PriceHistory:
        if not 1 <= days <= MAX_HISTORY_DAYS:
            raise ValidationAppError(
                code="invalid_days",
                message="Invalid history range",
                error=f"days must be between 1 and {MAX_HISTORY_DAYS}",
                details={"field": "days"},
            )

        currency = (vs_currency or self._vs_currency).lower()
        key = build_cache_key("history", currency, coin_id, days)
        cached = self._cache.get(key) if self._cache else None
        if cached is not None:
            return cached

        history = await self._client.fetch_coin_history(coin_id, days, currency)
        if self._cache:
            self._cache.set(key, history)
        return history
