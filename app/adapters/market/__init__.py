"""Market data adapter layer - abstracts over price providers."""

from app.adapters.market.base import AbstractMarketDataClient
from app.adapters.market.coingecko_client import CoinGeckoClient
from app.adapters.market.factory import create_market_client

__all__ = [
    "AbstractMarketDataClient",
    "CoinGeckoClient",
    "create_market_client",
]
