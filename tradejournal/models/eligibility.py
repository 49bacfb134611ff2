"""Payout eligibility data models."""

from datetime import date
from enum import Enum
from pydantic import BaseModel, Field


class EligibilityMode(str, Enum):
    """How the eligibility counting window is anchored."""

    CYCLE = "cycle"
    ROLLING = "rolling"


class EligibilityWindow(BaseModel):
    """Result of a payout eligibility check."""

    mode: EligibilityMode = Field(..., description="Window policy used")
    window_start: date = Field(..., description="Inclusive first day of the window")
    window_end: date = Field(..., description="Inclusive last day of the window (today)")
    window_days: int = Field(..., ge=1, description="Trailing length used in rolling mode")
    winning_days: int = Field(..., ge=0, description="Days in the window with net P&L > 0")
    required_winning_days: int = Field(..., description="Winning days needed for a payout")
    eligible: bool = Field(..., description="Whether the threshold is met")
    remaining: int = Field(..., ge=0, description="Winning days still needed")

    model_config = {"frozen": True}
