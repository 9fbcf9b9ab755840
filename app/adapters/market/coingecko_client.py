"""CoinGecko market data client adapter."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from app.adapters.market.base import AbstractMarketDataClient
from app.core.errors import MarketDataAppError
from app.schemas.market import MarketData, PriceHistory, PricePoint

logger = logging.getLogger(__name__)


def _to_market_data(coin: dict[str, Any], fetched_at: datetime) -> MarketData:
    return MarketData(
        asset=coin["id"],
        symbol=str(coin.get("symbol", "")).upper(),
        name=coin.get("name", coin["id"]),
        price=coin.get("current_price"),
        price_change_24h=coin.get("price_change_24h"),
        price_change_percentage_24h=coin.get("price_change_percentage_24h"),
        volume_24h=coin.get("total_volume"),
        volume_change_24h=0,
        market_cap=coin.get("market_cap"),
        rank=coin.get("market_cap_rank"),
        timestamp=fetched_at,
    )


class CoinGeckoClient(AbstractMarketDataClient):
    """Client for the CoinGecko v3 public REST API.

    Uses a shared ``httpx.AsyncClient``; pass ``transport`` to stub the
    network in tests.
    """

    def __init__(
        self,
        base_url: str = "https://api.coingecko.com/api/v3",
        timeout_seconds: float = 10.0,
        trending_limit: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )
        self.trending_limit = trending_limit

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        try:
            response = await self.client.get(path, params=params)
        except httpx.HTTPError as exc:
            logger.warning(
                "market.request_failed",
                extra={"path": path, "error_type": type(exc).__name__},
            )
            raise MarketDataAppError(
                code="market_unavailable",
                message="Market data provider unreachable",
                error=f"{type(exc).__name__}: {exc}",
            ) from exc

        if response.is_error:
            logger.warning(
                "market.bad_status",
                extra={"path": path, "upstream_status": response.status_code},
            )
            raise MarketDataAppError(
                code="market_bad_status",
                message="Market data provider returned an error",
                error=f"HTTP error! status: {response.status_code}",
                details={"upstream_status": response.status_code},
            )

        try:
            return response.json()
        except ValueError as exc:
            raise MarketDataAppError(
                code="market_invalid_payload",
                message="Market data provider returned invalid JSON",
                error=str(exc),
            ) from exc

    async def fetch_market_data(
        self,
        ids: list[str],
        vs_currency: str = "usd",
    ) -> list[MarketData]:
        payload = await self._get_json(
            "/coins/markets",
            params={
                "ids": ",".join(ids),
                "vs_currency": vs_currency,
                "order": "market_cap_desc",
                "per_page": 100,
                "page": 1,
                "sparkline": "false",
                "price_change_percentage": "24h",
            },
        )
        if not isinstance(payload, list):
            raise MarketDataAppError(
                code="market_invalid_payload",
                message="Market data provider returned an unexpected payload",
                error="Expected a list of markets",
            )

        fetched_at = datetime.now(timezone.utc)
        return [_to_market_data(coin, fetched_at) for coin in payload]

    async def fetch_trending_coins(self) -> list[MarketData]:
        payload = await self._get_json("/search/trending")
        coins = payload.get("coins", []) if isinstance(payload, dict) else []
        trending_ids = [
            entry["item"]["id"]
            for entry in coins[: self.trending_limit]
            if isinstance(entry, dict) and entry.get("item", {}).get("id")
        ]
        if not trending_ids:
            return []
        return await self.fetch_market_data(trending_ids)

    async def fetch_coin_history(
        self,
        coin_id: str,
        days: int = 7,
        vs_currency: str = "usd",
    ) -> PriceHistory:
        payload = await self._get_json(
            f"/coins/{coin_id}/market_chart",
            params={"vs_currency": vs_currency, "days": days},
        )
        raw_prices = payload.get("prices", []) if isinstance(payload, dict) else []
        return PriceHistory(
            asset=coin_id,
            vs_currency=vs_currency,
            days=days,
            prices=[
                PricePoint(timestamp=int(ts), price=float(price))
                for ts, price in raw_prices
            ],
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    @property
    def is_closed(self) -> bool:
        return self.client.is_closed
