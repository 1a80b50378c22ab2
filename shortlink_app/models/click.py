"""
Data model for click events.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class ClickEvent(BaseModel):
    """
    One served redirect.

    Appended to the click ledger when a visitor resolves a live shortcode.
    Events are immutable once recorded.
    """

    timestamp: datetime = Field(..., description="When the redirect was served")
    referrer: Optional[str] = Field(None, description="Page that linked to the short URL")
    origin: Optional[str] = Field(None, description="Network address of the requester")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "timestamp": "2026-10-19T10:30:00Z",
                "referrer": "https://twitter.com",
                "origin": "192.168.1.1",
            }
        },
    }
