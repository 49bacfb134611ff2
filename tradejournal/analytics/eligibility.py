"""Payout eligibility over cycle or rolling windows."""

from datetime import date, timedelta
from typing import Any, Iterable, Mapping, Optional, Union

from tradejournal.analytics.daily import earliest_day, event_field
from tradejournal.clock import DayKey, parse_day
from tradejournal.models import DayTotal, EligibilityMode, EligibilityWindow

DEFAULT_WINDOW_DAYS = 14
DEFAULT_REQUIRED_WINNING_DAYS = 5


def _add_days(day: date, delta: int) -> date:
    try:
        return day + timedelta(days=delta)
    except OverflowError:
        return date.max if delta > 0 else date.min


def eligibility(
    daily: Mapping[DayKey, DayTotal],
    last_payout_date: Any,
    mode: Union[EligibilityMode, str] = EligibilityMode.CYCLE,
    window_days: int = DEFAULT_WINDOW_DAYS,
    required_winning_days: int = DEFAULT_REQUIRED_WINNING_DAYS,
    *,
    today: Any,
) -> EligibilityWindow:
    """Count winning days in the eligibility window ending today.

    Cycle mode starts the window the day after the last payout, or at the
    earliest recorded day when there has been no payout. Rolling mode uses
    the trailing ``window_days`` days and ignores payouts.

    Only days present in ``daily`` are inspected, so the cost depends on
    the number of trading days and not on the width of the window.

    Args:
        daily: Day-keyed aggregate from :func:`aggregate`.
        last_payout_date: Most recent payout day, or None.
        mode: ``cycle`` or ``rolling``.
        window_days: Rolling window length; values below 1 are treated as 1.
        required_winning_days: Winning days needed to be eligible.
        today: The caller's current day, as a date or ISO string. Keyword
            only; there is no wall-clock default.

    Returns:
        EligibilityWindow describing the window and the verdict.

    Raises:
        ValueError: If ``mode`` is unknown or ``today`` is not a day.
    """
    if isinstance(mode, str):
        mode = mode.lower()
    mode = EligibilityMode(mode)
    end = parse_day(today)
    if end is None:
        raise ValueError(f"Invalid today: {today!r}")
    window_days = max(1, int(window_days))

    if mode is EligibilityMode.ROLLING:
        start = _add_days(end, -(window_days - 1))
    else:
        last_payout = parse_day(last_payout_date)
        if last_payout is not None:
            start = _add_days(last_payout, 1)
        else:
            start = parse_day(earliest_day(daily)) or end

    winning_days = 0
    if start <= end:
        start_key = start.isoformat()
        end_key = end.isoformat()
        winning_days = sum(
            1 for key, day in daily.items() if start_key <= key <= end_key and day.is_win
        )

    return EligibilityWindow(
        mode=mode,
        window_start=start,
        window_end=end,
        window_days=window_days,
        winning_days=winning_days,
        required_winning_days=required_winning_days,
        eligible=winning_days >= required_winning_days,
        remaining=max(0, required_winning_days - winning_days),
    )


def latest_payout_date(payouts: Iterable[Any]) -> Optional[date]:
    """Return the most recent payout day, ignoring rows without a valid date."""
    latest = None
    for payout in payouts or ():
        day = parse_day(event_field(payout, "date"))
        if day is not None and (latest is None or day > latest):
            latest = day
    return latest
