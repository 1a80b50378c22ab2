"""
Shortcode registry.

Maps shortcodes to URL records and owns the atomicity boundary for the
create and resolve paths. A single lock guards both the record table and the
click ledger, so:

- two creates for the same custom shortcode cannot both succeed
- generated candidates are checked for existence under the same lock that
  inserts them
- a resolve increments the click counter and appends the ledger event
  together, with no lost updates

Nothing in here performs external I/O.
"""

import re
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from shortlink_app.config import settings
from shortlink_app.exceptions import (
    ExpiredError,
    InvalidShortcodeError,
    InvalidUrlError,
    InvalidValidityError,
    NotFoundError,
    ShortcodeConflictError,
)
from shortlink_app.ledger.strategies import ClickLedgerStrategy, InMemoryClickLedger
from shortlink_app.models.click import ClickEvent
from shortlink_app.models.url import URLRecord
from shortlink_app.schemas.url import URLStats
from shortlink_app.services.short_code_factory import ShortCodeFactory
from shortlink_app.services.short_code_strategies import ShortCodeStrategy

_url_adapter = TypeAdapter(AnyUrl)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ShortcodeRegistry:
    """
    In-memory registry of shortcodes.

    Records are never deleted. An expired record keeps its history and can
    still be inspected with stats(); it only refuses further redirects.
    """

    def __init__(
        self,
        ledger: Optional[ClickLedgerStrategy] = None,
        short_code_strategy: Optional[ShortCodeStrategy] = None,
        clock: Callable[[], datetime] = utcnow,
        default_validity_minutes: int = settings.default_validity_minutes,
        min_code_length: int = settings.custom_code_min_length,
    ):
        """
        Initialize an empty registry.

        Args:
            ledger: Click ledger (in-memory ledger by default)
            short_code_strategy: Generator for codes when none is requested
                                 (strategy from settings by default)
            clock: Returns the current, timezone-aware time
            default_validity_minutes: Lifetime used when create() gets none
            min_code_length: Minimum length of a custom shortcode
        """
        self.ledger = ledger if ledger is not None else InMemoryClickLedger()
        self.short_code_strategy = short_code_strategy or ShortCodeFactory.create_strategy()
        self.clock = clock
        self.default_validity_minutes = default_validity_minutes
        self.min_code_length = min_code_length
        self._shortcode_pattern = re.compile(rf"[A-Za-z0-9]{{{min_code_length},}}")
        self._records: Dict[str, URLRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, shortcode: str) -> bool:
        return self.exists(shortcode)

    def exists(self, shortcode: str) -> bool:
        """Check whether a shortcode keys a record, expired or not"""
        with self._lock:
            return shortcode in self._records

    def create(
        self,
        original_url: Any,
        custom_shortcode: Optional[Any] = None,
        validity_minutes: Optional[Any] = None
    ) -> URLRecord:
        """
        Register a new shortcode for a URL.

        An empty custom shortcode is treated the same as no shortcode.

        Args:
            original_url: Absolute URL to redirect to
            custom_shortcode: Requested shortcode, or None to generate one
            validity_minutes: Lifetime in minutes, or None for the default

        Returns:
            A snapshot of the new record

        Raises:
            InvalidUrlError: If the URL is missing or not absolute
            InvalidShortcodeError: If the custom shortcode is malformed
            ShortcodeConflictError: If the custom shortcode is taken
            InvalidValidityError: If validity is not a positive integer
        """
        self._validate_url(original_url)
        if custom_shortcode:
            self._validate_shortcode(custom_shortcode)

        with self._lock:
            if custom_shortcode:
                if custom_shortcode in self._records:
                    raise ShortcodeConflictError(
                        f"Shortcode '{custom_shortcode}' already exists"
                    )
                shortcode = custom_shortcode
            else:
                shortcode = self.short_code_strategy.generate(self._records.__contains__)

            created_at = self.clock()
            record = URLRecord(
                shortcode=shortcode,
                original_url=original_url,
                created_at=created_at,
                expiry=self._expiry(created_at, validity_minutes),
            )
            self._records[shortcode] = record
            self.ledger.open(shortcode)
            return record.model_copy()

    def resolve(
        self,
        shortcode: str,
        referrer: Optional[str] = None,
        origin: Optional[str] = None
    ) -> str:
        """
        Resolve a shortcode for a redirect and record the click.

        Returns:
            The original URL

        Raises:
            NotFoundError: If no record exists
            ExpiredError: If the record is past its expiry
        """
        with self._lock:
            record = self._get(shortcode)
            now = self.clock()
            if record.is_expired(now):
                raise ExpiredError(f"Shortcode '{shortcode}' has expired")

            record.click_count += 1
            self.ledger.append(
                shortcode,
                ClickEvent(timestamp=now, referrer=referrer or None, origin=origin),
            )
            return record.original_url

    def stats(self, shortcode: str) -> URLStats:
        """
        Get the record summary and full click history.

        Works for expired records too.

        Raises:
            NotFoundError: If no record exists
        """
        with self._lock:
            record = self._get(shortcode)
            return URLStats(
                shortcode=record.shortcode,
                original_url=record.original_url,
                created_at=record.created_at,
                expiry=record.expiry,
                total_clicks=record.click_count,
                click_details=self.ledger.all_events(shortcode),
            )

    def summary(self, shortcode: str, limit: int = 10, days: int = 7) -> Dict:
        """
        Get aggregated click analytics (top referrers, clicks per day).

        Raises:
            NotFoundError: If no record exists
        """
        with self._lock:
            record = self._get(shortcode)
            return {
                "shortcode": record.shortcode,
                "total_clicks": record.click_count,
                "top_referrers": self.ledger.top_referrers(shortcode, limit=limit),
                "clicks_by_day": self.ledger.clicks_by_day(
                    shortcode, now=self.clock(), days=days
                ),
            }

    def _get(self, shortcode: str) -> URLRecord:
        # Caller holds the lock
        record = self._records.get(shortcode)
        if record is None:
            raise NotFoundError(f"Shortcode '{shortcode}' not found")
        return record

    def _validate_url(self, original_url: Any) -> None:
        if not original_url or not isinstance(original_url, str):
            raise InvalidUrlError("Invalid or missing URL")
        try:
            _url_adapter.validate_python(original_url)
        except ValidationError:
            raise InvalidUrlError(f"Invalid URL: {original_url}")

    def _validate_shortcode(self, shortcode: Any) -> None:
        if not isinstance(shortcode, str) or not self._shortcode_pattern.fullmatch(shortcode):
            raise InvalidShortcodeError(
                "Invalid custom shortcode. Must be alphanumeric and at least "
                f"{self.min_code_length} characters."
            )

    def _validity(self, validity_minutes: Any) -> int:
        if validity_minutes is None:
            return self.default_validity_minutes
        if isinstance(validity_minutes, float) and validity_minutes.is_integer():
            validity_minutes = int(validity_minutes)
        if (
            isinstance(validity_minutes, bool)
            or not isinstance(validity_minutes, int)
            or validity_minutes < 1
        ):
            raise InvalidValidityError("Validity must be a positive integer (minutes)")
        return validity_minutes

    def _expiry(self, created_at: datetime, validity_minutes: Any) -> datetime:
        minutes = self._validity(validity_minutes)
        try:
            return created_at + timedelta(minutes=minutes)
        except OverflowError:
            raise InvalidValidityError("Validity is too large (expiry out of range)")
