"""Decimal helpers for monetary amounts.

All engine arithmetic runs on ``Decimal`` at full precision. Rounding to
cents happens once, at the boundary where a figure becomes part of a
result record.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")

# Upper bound for any single input amount
MAX_AMOUNT = Decimal("1e12")


def to_decimal(value: Any) -> Decimal:
    """Convert a trusted numeric value to Decimal.

    Floats go through ``str`` so that 0.1 becomes Decimal("0.1") rather
    than its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def coerce_amount(value: Any) -> Decimal:
    """Turn untrusted input into a non-negative, finite Decimal.

    Anything that cannot be read as a number, and any negative, NaN or
    infinite value, becomes zero. Amounts above MAX_AMOUNT are capped, which
    keeps every later cent rounding within the default Decimal precision.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        amount = to_decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not amount.is_finite() or amount < 0:
        return ZERO
    return min(amount, MAX_AMOUNT)


def coerce_int(value: Any, minimum: int, maximum: int) -> int:
    """Read an integer from untrusted input, truncating and clamping it."""
    amount = coerce_amount(value)
    return min(maximum, max(minimum, int(amount)))


def round_cents(value: Decimal) -> Decimal:
    """Round half-up to two decimals."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
