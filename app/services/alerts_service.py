"""Mock price alert storage.

Nothing is persisted and no alert is ever evaluated against prices; create
and delete only validate input and echo the result.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone

from app.core.errors import ValidationAppError
from app.schemas.alerts import VALID_CONDITIONS, Alert, AlertCreate, AlertDeleted


class AlertsService:
    async def list_alerts(self, user_id: str | None) -> list[Alert]:
        if not user_id:
            raise ValidationAppError(
                code="missing_user_id",
                message="User ID is required",
                error="Missing userId parameter",
                details={"field": "userId"},
            )

        now = datetime.now(timezone.utc)
        return [
            Alert(
                alert_id="1",
                user_id=user_id,
                asset="bitcoin",
                symbol="BTC",
                condition_type="price_above",
                value=55_000,
                status="active",
                created_at=now,
            ),
            Alert(
                alert_id="2",
                user_id=user_id,
                asset="ethereum",
                symbol="ETH",
                condition_type="price_below",
                value=3_000,
                status="active",
                created_at=now,
            ),
        ]

    async def create_alert(self, payload: AlertCreate) -> Alert:
        if payload.missing_fields():
            raise ValidationAppError(
                code="missing_fields",
                message="Missing required fields",
                error="userId, asset, symbol, conditionType, and value are required",
                details={"context": {"missing": payload.missing_fields()}},
            )

        if payload.condition_type not in VALID_CONDITIONS:
            raise ValidationAppError(
                code="invalid_condition_type",
                message="Invalid condition type",
                error=f"conditionType must be one of: {', '.join(VALID_CONDITIONS)}",
                details={"field": "conditionType"},
            )

        return Alert(
            alert_id=f"alert_{int(time.time() * 1000)}",
            user_id=payload.user_id,
            asset=payload.asset,
            symbol=payload.symbol,
            condition_type=payload.condition_type,
            value=payload.value,
            status="active",
            created_at=datetime.now(timezone.utc),
        )

    async def delete_alert(self, alert_id: str | None) -> AlertDeleted:
        if not alert_id:
            raise ValidationAppError(
                code="missing_alert_id",
                message="Alert ID is required",
                error="Missing alertId parameter",
                details={"field": "alertId"},
            )
        return AlertDeleted(alert_id=alert_id)
