"""Checklist readiness and plan adherence scores.

Percentages are rounded half-up: 2.5 becomes 3 and 0.5 becomes 1.
"""

from decimal import Decimal, ROUND_HALF_UP
from fractions import Fraction
from typing import Mapping, Optional

CHECKLIST_WEIGHT = 70
TRADE_LIMIT_WEIGHT = 30
DEFAULT_PENALTY_PER_TRADE = 10


def round_half_up(value: Fraction) -> int:
    """Round an exact fraction to the nearest integer, ties away from zero."""
    exact = Decimal(value.numerator) / Decimal(value.denominator)
    return int(exact.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _completed_fraction(checklist: Mapping[str, bool]) -> Fraction:
    if not checklist:
        return Fraction(0)
    done = sum(1 for value in checklist.values() if value)
    return Fraction(done, len(checklist))


def readiness(checklist: Mapping[str, bool]) -> int:
    """Percent of checklist items completed, 0-100.

    An empty checklist scores 0.
    """
    return round_half_up(_completed_fraction(checklist) * 100)


def adherence(
    checklist: Mapping[str, bool],
    trade_count: int = 0,
    max_trades: Optional[int] = None,
    penalty_per_trade: int = DEFAULT_PENALTY_PER_TRADE,
) -> int:
    """Blend checklist completion with trade-count discipline into 0-100.

    The checklist contributes up to 70 points. When a ``max_trades`` ceiling
    is set, staying at or under it adds 30 points, and every trade over the
    ceiling takes ``penalty_per_trade`` off those 30, never below 0. Without
    a ceiling the score tops out at 70.
    """
    score = round_half_up(_completed_fraction(checklist) * CHECKLIST_WEIGHT)
    if max_trades is not None:
        over = max(0, trade_count - max_trades)
        score += max(0, TRADE_LIMIT_WEIGHT - over * penalty_per_trade)
    return max(0, min(100, score))
