from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.responses import fetch_failed, ok
from app.core.errors import ValidationAppError
from app.core.rate_limit import enforce_rate_limit
from app.schemas.alerts import AlertCreate
from app.schemas.envelope import ApiResponse
from app.services.alerts_service import AlertsService

router = APIRouter(tags=["Alerts"])

_alerts_service = AlertsService()


@router.get(
    "/alerts",
    response_model=ApiResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def list_alerts(
    user_id: str | None = Query(None, alias="userId"),
) -> JSONResponse:
    try:
        alerts = await _alerts_service.list_alerts(user_id)
    except ValidationAppError:
        raise
    except Exception as exc:
        return fetch_failed("Failed to fetch alerts", exc)

    return ok(alerts, "Alerts fetched successfully")


@router.post(
    "/alerts",
    response_model=ApiResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def create_alert(payload: AlertCreate) -> JSONResponse:
    """Create a price alert (mocked: nothing is persisted or evaluated).

    Raises:
        ValidationAppError: 400 envelope for missing fields or an unknown
            conditionType.
    """
    try:
        alert = await _alerts_service.create_alert(payload)
    except ValidationAppError:
        raise
    except Exception as exc:
        return fetch_failed("Failed to create alert", exc)

    return ok(alert, "Alert created successfully")


@router.delete(
    "/alerts",
    response_model=ApiResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def delete_alert(
    alert_id: str | None = Query(None, alias="alertId"),
) -> JSONResponse:
    try:
        deleted = await _alerts_service.delete_alert(alert_id)
    except ValidationAppError:
        raise
    except Exception as exc:
        return fetch_failed("Failed to delete alert", exc)

    return ok(deleted, "Alert deleted successfully")
