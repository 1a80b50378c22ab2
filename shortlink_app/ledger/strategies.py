"""
Click ledger strategies.

The ledger performs no validation of its own. Callers (the registry) hold the
lock that makes an append atomic with the click counter update, so every
method here is synchronous.
"""

from abc import ABC, abstractmethod
from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, List

from shortlink_app.models.click import ClickEvent


class ClickLedgerStrategy(ABC):
    """
    Abstract base class for click ledgers.

    A ledger maps a shortcode to an ordered sequence of click events. The
    sequence is created empty together with its record, only ever grows,
    and is never truncated or reordered.
    """

    @abstractmethod
    def open(self, shortcode: str) -> None:
        """
        Create the empty event sequence for a new shortcode.

        Args:
            shortcode: Shortcode that was just inserted into the registry
        """
        pass

    @abstractmethod
    def append(self, shortcode: str, event: ClickEvent) -> None:
        """
        Append one click event.

        Args:
            shortcode: Existing shortcode (guaranteed by the caller)
            event: The click to record
        """
        pass

    @abstractmethod
    def all_events(self, shortcode: str) -> List[ClickEvent]:
        """
        Get every event for a shortcode in the order they were appended.

        Returns:
            A new list; mutating it does not affect the ledger
        """
        pass

    @abstractmethod
    def count(self, shortcode: str) -> int:
        """Get the number of events recorded for a shortcode"""
        pass

    def top_referrers(self, shortcode: str, limit: int = 10) -> List[Dict]:
        """
        Get the referrers that sent the most clicks.

        Clicks without a referrer are not counted. Ties keep the order in
        which the referrers first appeared.
        """
        counts = Counter(
            event.referrer
            for event in self.all_events(shortcode)
            if event.referrer
        )
        return [
            {"referrer": referrer, "clicks": clicks}
            for referrer, clicks in counts.most_common(limit)
        ]

    def clicks_by_day(
        self,
        shortcode: str,
        now: datetime,
        days: int = 7
    ) -> List[Dict]:
        """
        Get daily click counts for the last `days` days, oldest first.

        Days without clicks are included with a count of zero. The last
        entry is the day containing `now`.
        """
        today = now.date()
        first_day = today - timedelta(days=days - 1)

        per_day = Counter(
            event.timestamp.date()
            for event in self.all_events(shortcode)
            if first_day <= event.timestamp.date() <= today
        )
        return [
            {"day": day, "clicks": per_day.get(day, 0)}
            for day in (first_day + timedelta(days=offset) for offset in range(days))
        ]


class InMemoryClickLedger(ClickLedgerStrategy):
    """
    In-memory ledger using a dict of lists.

    Lives as long as the process. Not thread-safe on its own; the registry
    serializes access.
    """

    def __init__(self):
        """Initialize empty ledger"""
        self._events: Dict[str, List[ClickEvent]] = {}

    def open(self, shortcode: str) -> None:
        self._events.setdefault(shortcode, [])

    def append(self, shortcode: str, event: ClickEvent) -> None:
        self._events[shortcode].append(event)

    def all_events(self, shortcode: str) -> List[ClickEvent]:
        return list(self._events.get(shortcode, []))

    def count(self, shortcode: str) -> int:
        return len(self._events.get(shortcode, []))
