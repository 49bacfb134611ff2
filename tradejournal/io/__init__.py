"""Input loaders for TradeJournal."""

from tradejournal.io.loader import load_checklist, load_payouts, load_rows, load_trades

__all__ = ["load_checklist", "load_payouts", "load_rows", "load_trades"]
