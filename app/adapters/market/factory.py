"""Factory for market data client instances."""

from app.adapters.market.base import AbstractMarketDataClient
from app.adapters.market.coingecko_client import CoinGeckoClient
from app.core.config import settings


def create_market_client() -> AbstractMarketDataClient:
    """Instantiate the market data client from ``settings.market``.

    Returns:
        AbstractMarketDataClient: Configured CoinGecko client.
    """
    return CoinGeckoClient(
        base_url=settings.market.base_url,
        timeout_seconds=settings.market.timeout_seconds,
        trending_limit=settings.market.trending_limit,
    )
