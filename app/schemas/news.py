"""Pydantic schemas for static news items."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NewsSource(BaseModel):
    name: str


class NewsItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    url: str
    published_at: datetime = Field(..., alias="publishedAt")
    source: NewsSource
