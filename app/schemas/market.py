"""Pydantic schemas for market data payloads.

Field names are snake_case in Python and camelCase on the wire, matching the
dashboard's existing JSON contract.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MarketData(BaseModel):
    """Normalized 24h market quote for a single asset."""

    model_config = ConfigDict(populate_by_name=True)

    asset: str = Field(..., description="Provider asset id (e.g., 'bitcoin').")
    symbol: str = Field(..., description="Upper-cased ticker symbol.")
    name: str = Field(..., description="Display name.")
    price: float | None = Field(None, description="Current price in the quote currency.")
    price_change_24h: float | None = Field(None, alias="priceChange24h")
    price_change_percentage_24h: float | None = Field(None, alias="priceChangePercentage24h")
    volume_24h: float | None = Field(None, alias="volume24h")
    volume_change_24h: float = Field(
        0,
        alias="volumeChange24h",
        description="Not provided by CoinGecko; always 0.",
    )
    market_cap: float | None = Field(None, alias="marketCap")
    rank: int | None = Field(None, description="Market-cap rank.")
    timestamp: datetime = Field(..., description="When the quote was normalized.")


class PricePoint(BaseModel):
    """A single price sample of an asset history."""

    timestamp: int = Field(..., description="Epoch milliseconds.")
    price: float


class PriceHistory(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    asset: str
    vs_currency: str = Field(..., alias="vsCurrency")
    days: int
    prices: list[PricePoint] = Field(default_factory=list)
