from abc import ABC, abstractmethod

from app.schemas.market import MarketData, PriceHistory


class AbstractMarketDataClient(ABC):
	"""Interface for market data providers."""

	@abstractmethod
	async def fetch_market_data(
		self,
		ids: list[str],
		vs_currency: str = "usd",
	) -> list[MarketData]:
		"""Fetch 24h market quotes for the given asset ids.

		Args:
			ids: Provider asset ids (e.g., ["bitcoin", "ethereum"]).
			vs_currency: Quote currency.

		Returns:
			list[MarketData]: Quotes ordered by market cap, descending.

		Raises:
			MarketDataAppError: If the provider call fails.
		"""
		...

	@abstractmethod
	async def fetch_trending_coins(self) -> list[MarketData]:
		"""Fetch market quotes for the provider's currently trending assets."""
		...

	@abstractmethod
	async def fetch_coin_history(
		self,
		coin_id: str,
		days: int = 7,
		vs_currency: str = "usd",
	) -> PriceHistory:
		"""Fetch price samples for ``coin_id`` over the last ``days`` days."""
		...

	async def aclose(self) -> None:
		"""Release network resources held by the client."""
		return None

	@property
	def is_closed(self) -> bool:
		"""Whether ``aclose`` has released the client."""
		return False
