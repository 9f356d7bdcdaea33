"""Process clock abstraction."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of wall-clock time."""

    def now(self) -> datetime:
        """Return the current local time."""

    def today(self) -> date:
        """Return the current calendar day."""


@dataclass
class SystemClock(Clock):
    """Clock backed by the system time in an optional IANA timezone."""

    timezone_name: str | None = None

    def now(self) -> datetime:
        """Return the current time in the configured zone."""
        if self.timezone_name:
            return datetime.now(tz=ZoneInfo(self.timezone_name))
        return datetime.now().astimezone()

    def today(self) -> date:
        """Return today's date in the configured zone."""
        return self.now().date()
