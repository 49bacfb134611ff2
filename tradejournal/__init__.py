"""TradeJournal - performance aggregation and rule evaluation for a trading journal."""

__version__ = "0.1.0"
