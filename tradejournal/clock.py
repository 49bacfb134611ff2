"""Calendar-day helpers and injectable clocks.

Every engine in ``tradejournal.analytics`` takes "today" as an argument.
Only the outer layer (CLI, host application) reads the wall clock, through
one of the clocks defined here.
"""

from datetime import date, datetime
from typing import Any, Optional, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DayKey = str


def parse_day(value: Any) -> Optional[date]:
    """Parse a calendar day from a date, datetime or ISO string.

    Datetimes contribute the calendar date they carry; no timezone
    conversion is applied.

    Returns:
        The parsed date, or None if the value cannot be read as a day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if len(text) < 10:
        return None
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def to_day_key(value: Any) -> Optional[DayKey]:
    """Normalise a day-like value to its ``YYYY-MM-DD`` key."""
    day = parse_day(value)
    if day is None:
        return None
    return day.isoformat()


class Clock(Protocol):
    """Source of the caller's current calendar day."""

    def today(self) -> date:
        ...


class SystemClock:
    """Wall clock evaluated in a fixed timezone."""

    def __init__(self, timezone: str = "UTC"):
        try:
            self.tz = ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {timezone}") from e

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """Clock pinned to a single day, for tests and ``--today`` overrides."""

    def __init__(self, day: date):
        self._day = day

    def today(self) -> date:
        return self._day
