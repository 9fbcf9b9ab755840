from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.adapters.market.factory import create_market_client
from app.api.responses import fetch_failed, ok
from app.core.config import settings
from app.core.errors import ValidationAppError
from app.core.rate_limit import enforce_rate_limit
from app.schemas.envelope import ApiResponse
from app.services.market_service import MarketService, parse_ids
from app.utils.simple_cache import SimpleTTLCache

router = APIRouter(tags=["Market"])

_market_client = create_market_client()
_cache = (
    SimpleTTLCache(
        ttl_seconds=settings.market.cache_ttl_seconds,
        max_entries=settings.market.cache_max_entries,
    )
    if settings.market.cache_ttl_seconds > 0
    else None
)
_market_service = MarketService(
    client=_market_client,
    cache=_cache,
    vs_currency=settings.market.vs_currency,
)


def open_market_client() -> None:
    """Give the service a live client if a previous shutdown closed it."""
    global _market_client
    if _market_client.is_closed:
        _market_client = create_market_client()
        _market_service.client = _market_client


async def close_market_client() -> None:
    await _market_client.aclose()


@router.get(
    "/market",
    response_model=ApiResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def get_market(
    kind: str = Query("market", alias="type", description="'trending' for top trending assets; anything else returns the selected ids"),
    ids: str | None = Query(None, description="Comma-separated asset ids (default: bitcoin,ethereum,binancecoin)"),
) -> JSONResponse:
    """Market quotes endpoint.

    Returns 24h quotes for the requested asset ids, or for the provider's
    trending assets when ``type=trending``.

    Returns:
        JSONResponse: Envelope with a list of MarketData; 500 envelope when
            the provider call fails.
    """
    try:
        if kind == "trending":
            data = await _market_service.get_trending()
        else:
            data = await _market_service.get_market_data(
                parse_ids(ids, settings.market.default_id_list)
            )
    except Exception as exc:
        return fetch_failed("Failed to fetch market data", exc)

    return ok(data, "Market data fetched successfully")


@router.get(
    "/market/{coin_id}/history",
    response_model=ApiResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def get_price_history(
    coin_id: str,
    days: int = Query(7, description="Number of days of history (1-365)"),
    vs_currency: str | None = Query(None, alias="vsCurrency"),
) -> JSONResponse:
    """Price history endpoint for chart data."""
    try:
        history = await _market_service.get_history(coin_id, days, vs_currency)
    except ValidationAppError:
        raise
    except Exception as exc:
        return fetch_failed("Failed to fetch price history", exc)

    return ok(history, "Price history fetched successfully")
