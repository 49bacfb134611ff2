"""Payout data models."""

from datetime import date as date_type
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class Payout(BaseModel):
    """Represents a recorded payout."""

    date: date_type = Field(..., description="Payout date")
    amount: Decimal = Field(..., description="Amount paid out")
    source: Optional[str] = Field(default=None, description="Prop firm or broker")
    notes: Optional[str] = Field(default=None, description="User notes")

    model_config = {"frozen": True}


class PayoutSummary(BaseModel):
    """Aggregate payout figures as of a given day."""

    total: Decimal = Field(..., description="Sum of all payouts")
    ytd: Decimal = Field(..., description="Payouts in the current calendar year")
    last_30d: Decimal = Field(..., description="Payouts in the last 30 days")
    average: Decimal = Field(..., description="Mean payout amount")
    net: Decimal = Field(..., description="Gross P&L minus total payouts")
    count: int = Field(..., ge=0, description="Number of payouts")

    model_config = {"frozen": True}
