"""Day-keyed aggregation of raw trade events."""

import logging
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, InvalidOperation, localcontext
from typing import Any, Iterable, Mapping, Optional

from tradejournal.clock import DayKey, to_day_key
from tradejournal.models import DayTotal

logger = logging.getLogger(__name__)

DailyAggregate = dict[DayKey, DayTotal]

_ZERO = Decimal("0")

# Unrounded context: additions of finite Decimals stay exact.
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def event_field(event: Any, name: str) -> Any:
    """Read ``name`` from a mapping key or an object attribute."""
    if isinstance(event, Mapping):
        return event.get(name)
    return getattr(event, name, None)


def coerce_pnl(value: Any) -> Decimal:
    """Coerce a P&L value to Decimal, mapping anything unusable to 0.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.
    """
    if value is None or isinstance(value, bool):
        return _ZERO
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float, str)):
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            return _ZERO
    else:
        return _ZERO
    if not number.is_finite():
        return _ZERO
    return number


def aggregate(events: Iterable[Any]) -> DailyAggregate:
    """Reduce trade events into per-day net P&L and trade counts.

    Events may be ``TradeEvent`` models, mappings or any object with
    ``date`` and ``pnl`` attributes. Events without a readable date are
    skipped; events with an unreadable P&L count as a 0 trade.

    Args:
        events: Trade events in any order.

    Returns:
        Fresh mapping of ``YYYY-MM-DD`` to DayTotal, in first-seen order.
        Each net is the exact sum of the day's P&L, with no rounding.
    """
    sums: dict[DayKey, Decimal] = {}
    counts: dict[DayKey, int] = {}

    with localcontext(EXACT_CONTEXT):
        for event in events or ():
            key = to_day_key(event_field(event, "date"))
            if key is None:
                logger.debug("Skipping trade event without a valid date: %r", event)
                continue
            sums[key] = sums.get(key, _ZERO) + coerce_pnl(event_field(event, "pnl"))
            counts[key] = counts.get(key, 0) + 1

    return {key: DayTotal(net_pnl=total, count=counts[key]) for key, total in sums.items()}


def earliest_day(daily: Mapping[DayKey, DayTotal]) -> Optional[DayKey]:
    """Return the earliest day key in the aggregate, or None if empty."""
    return min(daily) if daily else None


def target_progress(daily: Mapping[DayKey, DayTotal], day: Any, target: Any) -> float:
    """Percent of a daily P&L target reached on ``day``, capped at 100.

    A losing day yields a negative percentage. A non-positive or unreadable
    target yields 0.
    """
    goal = coerce_pnl(target)
    key = to_day_key(day)
    if goal <= 0 or key is None:
        return 0.0
    total = daily.get(key)
    net = total.net_pnl if total is not None else _ZERO
    return float(min(net / goal * 100, Decimal("100")))
