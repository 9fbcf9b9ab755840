from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.responses import fetch_failed, ok
from app.core.errors import ValidationAppError
from app.core.rate_limit import enforce_rate_limit
from app.schemas.envelope import ApiResponse
from app.schemas.portfolio import PortfolioItemCreate
from app.services.portfolio_service import PortfolioService

router = APIRouter(tags=["Portfolio"])

_portfolio_service = PortfolioService()


@router.get(
    "/portfolio",
    response_model=ApiResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def get_portfolio(
    user_id: str | None = Query(None, alias="userId"),
) -> JSONResponse:
    """List a user's holdings with value and P&L per asset.

    Raises:
        ValidationAppError: 400 envelope when userId is missing.
    """
    try:
        holdings = await _portfolio_service.get_holdings(user_id)
    except ValidationAppError:
        raise
    except Exception as exc:
        return fetch_failed("Failed to fetch portfolio data", exc)

    return ok(holdings, "Portfolio data fetched successfully")


@router.get(
    "/portfolio/summary",
    response_model=ApiResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def get_portfolio_summary(
    user_id: str | None = Query(None, alias="userId"),
) -> JSONResponse:
    """Portfolio totals: value, P&L and P&L percentage of cost."""
    try:
        summary = await _portfolio_service.get_summary(user_id)
    except ValidationAppError:
        raise
    except Exception as exc:
        return fetch_failed("Failed to fetch portfolio data", exc)

    return ok(summary, "Portfolio summary computed successfully")


@router.post(
    "/portfolio",
    response_model=ApiResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def add_portfolio_item(payload: PortfolioItemCreate) -> JSONResponse:
    """Add a holding (mocked: nothing is persisted)."""
    try:
        item = await _portfolio_service.add_item(payload)
    except ValidationAppError:
        raise
    except Exception as exc:
        return fetch_failed("Failed to add portfolio item", exc)

    return ok(item, "Portfolio item added successfully")
