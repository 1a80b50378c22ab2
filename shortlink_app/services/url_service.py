from typing import Any, Optional

from shortlink_app.audit.logger import AuditLogger
from shortlink_app.exceptions import (
    ExpiredError,
    NotFoundError,
    ShortcodeConflictError,
    ShortcodeCreationError,
)
from shortlink_app.models.url import URLRecord
from shortlink_app.registry import ShortcodeRegistry
from shortlink_app.schemas.url import URLStats, URLSummary


class URLService:
    """
    URL Service with dependency injection for the registry and audit logger.

    Every operation is audited after the registry call returns or raises.
    Registry errors are re-raised unchanged for the route to map onto a
    response.
    """

    def __init__(self, registry: ShortcodeRegistry, audit: Optional[AuditLogger] = None):
        """
        Initialize URL service with dependencies.

        Args:
            registry: Shortcode registry holding records and click ledger
            audit: Audit logger (optional; nothing is audited without it)
        """
        self.registry = registry
        self.audit = audit

    async def _audit(self, level: str, message: str) -> None:
        if self.audit:
            await self.audit.log(level, "service", message)

    async def create_short_url(
        self,
        url: Any,
        shortcode: Optional[Any] = None,
        validity: Optional[Any] = None
    ) -> URLRecord:
        """Create a new shortcode, generated unless one is requested"""
        try:
            record = self.registry.create(url, shortcode, validity)
        except ShortcodeConflictError as e:
            await self._audit("warn", str(e))
            raise
        except ShortcodeCreationError as e:
            await self._audit("error", str(e))
            raise

        await self._audit("info", f"shortcode created: {record.shortcode}")
        return record

    async def resolve(
        self,
        shortcode: str,
        referrer: Optional[str] = None,
        origin: Optional[str] = None
    ) -> str:
        """Get the original URL for a redirect, recording the click"""
        try:
            original_url = self.registry.resolve(shortcode, referrer=referrer, origin=origin)
        except NotFoundError:
            await self._audit("warn", f"shortcode not found: {shortcode}")
            raise
        except ExpiredError:
            await self._audit("warn", f"expired shortcode: {shortcode}")
            raise

        await self._audit("info", f"redirect for shortcode: {shortcode}")
        return original_url

    async def get_url_stats(self, shortcode: str) -> URLStats:
        """Get statistics for a shortcode (expired ones included)"""
        try:
            stats = self.registry.stats(shortcode)
        except NotFoundError:
            await self._audit("error", f"analytics for unknown shortcode: {shortcode}")
            raise

        await self._audit("info", f"serving analytics for {shortcode}")
        return stats

    async def get_url_summary(self, shortcode: str, limit: int = 10, days: int = 7) -> URLSummary:
        """Get top referrers and clicks per day for a shortcode"""
        try:
            summary = self.registry.summary(shortcode, limit=limit, days=days)
        except NotFoundError:
            await self._audit("error", f"summary for unknown shortcode: {shortcode}")
            raise

        await self._audit("info", f"serving summary for {shortcode}")
        return URLSummary(**summary)
