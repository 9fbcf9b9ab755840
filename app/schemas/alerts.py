"""Pydantic schemas for mock price alerts."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ConditionType = Literal["price_above", "price_below", "volume_spike", "news_mention"]
AlertStatus = Literal["active", "triggered", "paused"]

VALID_CONDITIONS: tuple[str, ...] = ("price_above", "price_below", "volume_spike", "news_mention")


class Alert(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    alert_id: str = Field(..., alias="alertId")
    user_id: str = Field(..., alias="userId")
    asset: str
    symbol: str
    condition_type: ConditionType = Field(..., alias="conditionType")
    value: float
    status: AlertStatus = "active"
    created_at: datetime = Field(..., alias="createdAt")
    triggered_at: datetime | None = Field(None, alias="triggeredAt")
    message: str | None = None


class AlertCreate(BaseModel):
    """Body of ``POST /v1/alerts``; required-ness is checked by the service."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str | None = Field(None, alias="userId")
    asset: str | None = None
    symbol: str | None = None
    condition_type: str | None = Field(None, alias="conditionType")
    value: float | None = None

    def missing_fields(self) -> list[str]:
        values = {
            "userId": self.user_id,
            "asset": self.asset,
            "symbol": self.symbol,
            "conditionType": self.condition_type,
            "value": self.value,
        }
        return [name for name, value in values.items() if not value]


class AlertDeleted(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    alert_id: str = Field(..., alias="alertId")
