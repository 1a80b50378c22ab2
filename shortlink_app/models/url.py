from datetime import datetime

from pydantic import BaseModel, Field


class URLRecord(BaseModel):
    """
    Stored metadata for one shortcode.

    Everything except click_count is fixed at creation. The registry
    increments click_count under its lock, together with the ledger append,
    so the count always equals the number of recorded click events.
    """

    shortcode: str
    original_url: str
    created_at: datetime
    expiry: datetime
    click_count: int = Field(default=0, ge=0)

    def is_expired(self, now: datetime) -> bool:
        """A record stops serving redirects once now is past its expiry"""
        return now > self.expiry
