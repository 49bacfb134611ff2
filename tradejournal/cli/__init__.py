"""CLI commands for TradeJournal.

This package provides the command-line interface for TradeJournal,
including streak, payout eligibility and plan readiness commands.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
