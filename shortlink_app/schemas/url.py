from pydantic import BaseModel, Field, computed_field, ConfigDict
from typing import Any, List, Optional
from datetime import date, datetime
from shortlink_app.config import settings
from shortlink_app.models.click import ClickEvent


class URLCreate(BaseModel):
    """Request body for creating a shortcode

    Fields are deliberately loose: the registry validates them so that bad
    input surfaces as InvalidUrl / InvalidShortcode / InvalidValidity rather
    than as a generic schema error.
    """
    url: Any = Field(None, description="The original URL to be shortened")
    shortcode: Optional[Any] = Field(None, description="Custom shortcode (4+ alphanumeric characters)")
    validity: Optional[Any] = Field(None, description="Lifetime in minutes (default 30)")


class URLCreateResponse(BaseModel):
    shortcode: str
    expiry: datetime

    @computed_field
    @property
    def short_link(self) -> str:
        """Computed field - automatically generated from shortcode"""
        return f"{settings.base_url}/shorturls/{self.shortcode}"

    model_config = ConfigDict(from_attributes=True)


class URLStats(BaseModel):
    shortcode: str
    original_url: str
    created_at: datetime
    expiry: datetime
    total_clicks: int
    click_details: List[ClickEvent] = []


class ReferrerCount(BaseModel):
    referrer: str
    clicks: int


class DailyClicks(BaseModel):
    day: date
    clicks: int


class URLSummary(BaseModel):
    shortcode: str
    total_clicks: int
    top_referrers: List[ReferrerCount]
    clicks_by_day: List[DailyClicks]
