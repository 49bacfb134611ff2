"""Pure performance engines for TradeJournal.

Nothing in this package reads the wall clock: every function takes the
caller's "today" explicitly.
"""

from tradejournal.analytics.daily import DailyAggregate, aggregate, earliest_day, target_progress
from tradejournal.analytics.eligibility import eligibility, latest_payout_date
from tradejournal.analytics.payouts import payout_summary
from tradejournal.analytics.readiness import adherence, readiness
from tradejournal.analytics.streak import current_streak, streak

__all__ = [
    "DailyAggregate",
    "aggregate",
    "earliest_day",
    "target_progress",
    "eligibility",
    "latest_payout_date",
    "payout_summary",
    "adherence",
    "readiness",
    "current_streak",
    "streak",
]
