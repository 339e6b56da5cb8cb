"""Fixed-point price helpers."""

from decimal import ROUND_HALF_EVEN, Decimal
from typing import Union

PRICE_QUANTUM = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round2(value: Number) -> Decimal:
    """Round to two fractional digits using banker's rounding."""
    return to_decimal(value).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_EVEN)
