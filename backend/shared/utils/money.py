"""
Currency arithmetic helpers.

Aggregations run on Decimal at full precision; values are rounded to cents
(half-up) only when they leave the service as response fields.
"""

from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")
TENTH = Decimal("0.1")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """Coerce a stored amount to Decimal; None counts as zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() first so floats coming back from SQLite keep their printed value
    return Decimal(str(value))


def to_cents(value: Decimal) -> Decimal:
    """Round half-up to whole cents, staying in Decimal."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def floor_cents(value: Decimal) -> Decimal:
    """Truncate a non-negative amount to whole cents."""
    return value.quantize(CENT, rounding=ROUND_DOWN)


def money(value: Decimal) -> float:
    """Round to 2 decimal places for output."""
    return float(to_cents(value))


def percent_of(amount: Decimal, rate_percent: Decimal) -> Decimal:
    """amount * rate/100, unrounded."""
    return amount * rate_percent / HUNDRED


def percent_change(current: Decimal, previous: Decimal) -> float:
    """
    Relative change in percent, rounded to one decimal.

    Returns exactly 0.0 when there is no previous value to compare against.
    """
    if previous <= ZERO:
        return 0.0
    change = (current - previous) / previous * HUNDRED
    return float(change.quantize(TENTH, rounding=ROUND_HALF_UP))
