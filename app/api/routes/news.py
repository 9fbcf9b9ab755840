from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.responses import fetch_failed, ok
from app.core.errors import ValidationAppError
from app.core.rate_limit import enforce_rate_limit
from app.schemas.envelope import ApiResponse
from app.services.news_service import NewsService

router = APIRouter(tags=["News"])

_news_service = NewsService()


@router.get(
    "/news",
    response_model=ApiResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def get_news(
    limit: int = Query(10, description="Maximum number of items to return"),
) -> JSONResponse:
    """Latest crypto headlines (static feed)."""
    try:
        news = await _news_service.latest(limit)
    except ValidationAppError:
        raise
    except Exception as exc:
        return fetch_failed("Failed to fetch news", exc)

    return ok(news, "News fetched successfully")
