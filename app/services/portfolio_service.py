"""Mock portfolio storage and the arithmetic reducers over it.

Holdings are not persisted. ``get_holdings`` returns a fixed sample book for
any user and ``add_item`` echoes the created item back.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Iterable, NamedTuple

from app.core.errors import ValidationAppError
from app.schemas.portfolio import Holding, PortfolioItem, PortfolioItemCreate, PortfolioSummary


class Position(NamedTuple):
    total_value: float
    pnl: float
    pnl_percentage: float


def compute_position(quantity: float, average_buy_price: float, current_price: float) -> Position:
    """Derive value and profit/loss for a single holding.

    Args:
        quantity: Units held.
        average_buy_price: Average cost per unit.
        current_price: Current price per unit.

    Returns:
        Position with value, absolute P&L and P&L percentage of cost
        (percentage is 0 when cost is 0), each rounded to 2 places.
    """
    total_value = quantity * current_price
    cost_basis = quantity * average_buy_price
    pnl = total_value - cost_basis
    pnl_percentage = (pnl / cost_basis) * 100 if cost_basis else 0.0
    return Position(round(total_value, 2), round(pnl, 2), round(pnl_percentage, 2))


def summarize_portfolio(user_id: str, holdings: Iterable[Holding]) -> PortfolioSummary:
    """Reduce holdings to portfolio totals.

    The P&L percentage is relative to total cost (value minus P&L), and is 0
    for an empty or worthless portfolio.
    """
    items = list(holdings)
    total_value = sum(h.total_value for h in items)
    total_pnl = sum(h.pnl for h in items)
    total_pnl_percentage = (
        (total_pnl / (total_value - total_pnl)) * 100
        if total_value > 0 and total_value != total_pnl
        else 0.0
    )
    return PortfolioSummary(
        user_id=user_id,
        total_value=round(total_value, 2),
        total_pnl=round(total_pnl, 2),
        total_pnl_percentage=round(total_pnl_percentage, 2),
        holdings_count=len(items),
    )


_SAMPLE_BOOK: tuple[tuple[str, str, str, float, float, float], ...] = (
    # (portfolio_id, asset, symbol, quantity, average_buy_price, current_price)
    ("1", "bitcoin", "BTC", 0.5, 45_000, 50_000),
    ("2", "ethereum", "ETH", 10, 3_000, 3_200),
)


def _require_user_id(user_id: str | None) -> str:
    if not user_id:
        raise ValidationAppError(
            code="missing_user_id",
            message="User ID is required",
            error="Missing userId parameter",
            details={"field": "userId"},
        )
    return user_id


class PortfolioService:
    async def get_holdings(self, user_id: str | None) -> list[Holding]:
        user_id = _require_user_id(user_id)
        now = datetime.now(timezone.utc)
        holdings = []
        for portfolio_id, asset, symbol, quantity, avg_price, price in _SAMPLE_BOOK:
            position = compute_position(quantity, avg_price, price)
            holdings.append(
                Holding(
                    portfolio_id=portfolio_id,
                    user_id=user_id,
                    asset=asset,
                    symbol=symbol,
                    quantity=quantity,
                    average_buy_price=avg_price,
                    current_price=price,
                    total_value=position.total_value,
                    pnl=position.pnl,
                    pnl_percentage=position.pnl_percentage,
                    transactions=[],
                    last_updated=now,
                )
            )
        return holdings

    async def get_summary(self, user_id: str | None) -> PortfolioSummary:
        user_id = _require_user_id(user_id)
        holdings = await self.get_holdings(user_id)
        return summarize_portfolio(user_id, holdings)

    async def add_item(self, payload: PortfolioItemCreate) -> PortfolioItem:
        missing = payload.missing_fields()
        if missing:
            raise ValidationAppError(
                code="missing_fields",
                message="Missing required fields",
                error="userId, asset, quantity, and averageBuyPrice are required",
                details={"context": {"missing": missing}},
            )

        return PortfolioItem(
            portfolio_id=f"portfolio_{int(time.time() * 1000)}",
            user_id=payload.user_id,
            asset=payload.asset,
            quantity=payload.quantity,
            average_buy_price=payload.average_buy_price,
            created_at=datetime.now(timezone.utc),
        )
