"""DayTotal data model."""

from decimal import Decimal
from pydantic import BaseModel, Field


class DayTotal(BaseModel):
    """Net result and trade count for a single calendar day."""

    net_pnl: Decimal = Field(default=Decimal("0"), description="Sum of P&L for the day")
    count: int = Field(default=0, ge=0, description="Number of trades on the day")

    model_config = {"frozen": True}

    @property
    def is_win(self) -> bool:
        return self.net_pnl > 0

    @property
    def is_loss(self) -> bool:
        return self.net_pnl < 0
