"""TradeEvent data model."""

from datetime import date as date_type
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class TradeEvent(BaseModel):
    """Represents a dated profit/loss event supplied by the trade store."""

    date: date_type = Field(..., description="Calendar day the trade belongs to")
    pnl: Optional[Decimal] = Field(default=None, description="Realized P&L (None counts as 0)")

    model_config = {"frozen": True}
