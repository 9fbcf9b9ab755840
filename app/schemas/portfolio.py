"""Pydantic schemas for the mock portfolio."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Transaction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transaction_id: str = Field(..., alias="transactionId")
    type: Literal["buy", "sell", "transfer"]
    asset: str
    quantity: float
    price: float
    timestamp: datetime
    tx_hash: str | None = Field(None, alias="txHash")


class Holding(BaseModel):
    """A position in a single asset with derived value and P&L."""

    model_config = ConfigDict(populate_by_name=True)

    portfolio_id: str = Field(..., alias="portfolioId")
    user_id: str = Field(..., alias="userId")
    asset: str
    symbol: str
    quantity: float
    average_buy_price: float = Field(..., alias="averageBuyPrice")
    current_price: float = Field(..., alias="currentPrice")
    total_value: float = Field(..., alias="totalValue")
    pnl: float
    pnl_percentage: float = Field(..., alias="pnlPercentage")
    transactions: list[Transaction] = Field(default_factory=list)
    last_updated: datetime = Field(..., alias="lastUpdated")


class PortfolioSummary(BaseModel):
    """Totals reduced from a list of holdings."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    total_value: float = Field(..., alias="totalValue")
    total_pnl: float = Field(..., alias="totalPnl")
    total_pnl_percentage: float = Field(..., alias="totalPnlPercentage")
    holdings_count: int = Field(..., alias="holdingsCount")


class PortfolioItemCreate(BaseModel):
    """Body of ``POST /v1/portfolio``.

    Fields are optional at the schema level so that missing values produce
    the route's own "Missing required fields" envelope instead of a generic
    validation error.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str | None = Field(None, alias="userId")
    asset: str | None = None
    quantity: float | None = None
    average_buy_price: float | None = Field(None, alias="averageBuyPrice")

    def missing_fields(self) -> list[str]:
        values: dict[str, Any] = {
            "userId": self.user_id,
            "asset": self.asset,
            "quantity": self.quantity,
            "averageBuyPrice": self.average_buy_price,
        }
        return [name for name, value in values.items() if not value]


class PortfolioItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    portfolio_id: str = Field(..., alias="portfolioId")
    user_id: str = Field(..., alias="userId")
    asset: str
    quantity: float
    average_buy_price: float = Field(..., alias="averageBuyPrice")
    created_at: datetime = Field(..., alias="createdAt")
