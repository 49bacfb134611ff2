"""Data models for TradeJournal."""

from tradejournal.models.trade import TradeEvent
from tradejournal.models.daily import DayTotal
from tradejournal.models.eligibility import EligibilityMode, EligibilityWindow
from tradejournal.models.payout import Payout, PayoutSummary

__all__ = [
    "TradeEvent",
    "DayTotal",
    "EligibilityMode",
    "EligibilityWindow",
    "Payout",
    "PayoutSummary",
]
