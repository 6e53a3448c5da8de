"""Clock port, the source of "now" and "today" for the services."""

from abc import ABC, abstractmethod
from datetime import date, datetime, timezone


class Clock(ABC):
    """Injectable time source so timestamps are deterministic under test."""

    @abstractmethod
    def now(self) -> datetime:
        """Current instant, timezone-aware UTC."""
        ...

    def today(self) -> date:
        """Current calendar date."""
        return self.now().date()


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
