"""Consecutive winning-day streaks.

Rules:
- A day with net P&L > 0 extends the streak.
- A day with no trades or a net of exactly 0 is neutral: it neither
  extends nor breaks the streak.
- A losing day breaks the streak only once it is closed. Every day before
  the anchor is closed; the anchor itself is closed only when
  ``treat_anchor_as_finalized`` is set, so an open losing "today" does not
  break a streak until the session is over.
"""

from datetime import date, timedelta
from typing import Any, Iterable, Mapping

from tradejournal.analytics.daily import aggregate, earliest_day
from tradejournal.clock import DayKey, parse_day
from tradejournal.models import DayTotal

# Upper bound on days walked, about ten years.
MAX_STREAK_STEPS = 3650


def streak(
    daily: Mapping[DayKey, DayTotal],
    anchor_date: Any,
    treat_anchor_as_finalized: bool = False,
    earliest_known_date: Any = None,
) -> int:
    """Count consecutive winning days walking backward from the anchor.

    Args:
        daily: Day-keyed aggregate from :func:`aggregate`.
        anchor_date: Day to count back from (usually today).
        treat_anchor_as_finalized: Let a loss on the anchor day break the streak.
        earliest_known_date: Stop once the walk would pass this day. Defaults
            to the earliest day in ``daily``, or the anchor if it is empty.

    Returns:
        The streak length; 0 when there is no current streak or the anchor
        cannot be read.
    """
    anchor = parse_day(anchor_date)
    if anchor is None:
        return 0

    floor = parse_day(earliest_known_date)
    if floor is None:
        floor = parse_day(earliest_day(daily)) or anchor

    count = 0
    cursor = anchor
    for _ in range(MAX_STREAK_STEPS):
        day = daily.get(cursor.isoformat())
        closed = cursor != anchor or treat_anchor_as_finalized

        if day is not None and day.is_win:
            count += 1
        elif day is not None and day.is_loss and closed:
            break

        if cursor == date.min:
            break
        cursor -= timedelta(days=1)
        if cursor < floor:
            break

    return count


def current_streak(
    events: Iterable[Any],
    today: date,
    treat_anchor_as_finalized: bool = False,
) -> int:
    """Aggregate raw trade events and return the streak as of ``today``."""
    return streak(aggregate(events), today, treat_anchor_as_finalized)
