"""Payout bookkeeping figures."""

from datetime import date
from decimal import Decimal, localcontext
from typing import Any, Iterable

from tradejournal.analytics.daily import EXACT_CONTEXT, coerce_pnl, event_field
from tradejournal.clock import parse_day
from tradejournal.models import PayoutSummary

RECENT_PAYOUT_DAYS = 30


def payout_summary(payouts: Iterable[Any], today: date, gross_pnl: Any = 0) -> PayoutSummary:
    """Summarise payouts as of ``today``.

    Args:
        payouts: Payout records (models, mappings or objects with
            ``date`` and ``amount``).
        today: The caller's current day.
        gross_pnl: Total trading P&L, used for the net-after-payouts figure.

    Returns:
        PayoutSummary with totals for all time, the current year and the
        last 30 days. Unreadable amounts count as 0; rows without a date
        still count toward the all-time total.
    """
    rows = list(payouts or ())
    total = ytd = last_30d = Decimal("0")

    with localcontext(EXACT_CONTEXT):
        for row in rows:
            amount = coerce_pnl(event_field(row, "amount"))
            total += amount
            day = parse_day(event_field(row, "date"))
            if day is None:
                continue
            if day.year == today.year:
                ytd += amount
            if (today - day).days <= RECENT_PAYOUT_DAYS:
                last_30d += amount
        net = coerce_pnl(gross_pnl) - total

    average = total / len(rows) if rows else Decimal("0")
    return PayoutSummary(
        total=total,
        ytd=ytd,
        last_30d=last_30d,
        average=average,
        net=net,
        count=len(rows),
    )
