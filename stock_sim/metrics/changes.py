"""
Price change statistics for display consumers.

All functions are pure: they read a stock and its ledger and never mutate
either. Division by a zero reference price is not an error; it yields the
infinity sentinels of PercentageChange so callers can special-case them.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from ..models.stock import Stock
from ..utils.money import Number, round2, to_decimal

WEEKLY_WINDOW_DAYS = 7
MONTHLY_WINDOW_DAYS = 30


class ChangeKind(str, Enum):
    """Kinds of percentage change results."""
    FINITE = "finite"
    POSITIVE_INFINITE = "positive_infinite"
    NEGATIVE_INFINITE = "negative_infinite"
    UNAVAILABLE = "unavailable"


class Direction(str, Enum):
    """Sign classification driving display colour."""
    ZERO = "zero"
    POSITIVE = "positive"
    NEGATIVE = "negative"


def classify(value: Number) -> Direction:
    """Classify a signed amount as zero, positive or negative."""
    amount = to_decimal(value)
    if amount == 0:
        return Direction.ZERO
    if amount > 0:
        return Direction.POSITIVE
    return Direction.NEGATIVE


@dataclass(frozen=True)
class PercentageChange:
    """Tagged percentage change: a finite value, an infinity, or unavailable."""
    kind: ChangeKind
    value: Optional[Decimal] = None     # Set only for FINITE results

    @classmethod
    def finite(cls, value: Number) -> "PercentageChange":
        return cls(kind=ChangeKind.FINITE, value=round2(value))

    @classmethod
    def positive_infinite(cls) -> "PercentageChange":
        return cls(kind=ChangeKind.POSITIVE_INFINITE)

    @classmethod
    def negative_infinite(cls) -> "PercentageChange":
        return cls(kind=ChangeKind.NEGATIVE_INFINITE)

    @classmethod
    def unavailable(cls) -> "PercentageChange":
        return cls(kind=ChangeKind.UNAVAILABLE)

    @property
    def is_available(self) -> bool:
        return self.kind != ChangeKind.UNAVAILABLE

    @property
    def direction(self) -> Direction:
        """Display direction; unavailable results render like zero."""
        if self.kind == ChangeKind.POSITIVE_INFINITE:
            return Direction.POSITIVE
        if self.kind == ChangeKind.NEGATIVE_INFINITE:
            return Direction.NEGATIVE
        if self.kind == ChangeKind.UNAVAILABLE:
            return Direction.ZERO
        return classify(self.value)

    def format(self) -> str:
        """Render for display, '/' when unavailable."""
        if self.kind == ChangeKind.FINITE:
            return f"{self.value} %"
        if self.kind == ChangeKind.POSITIVE_INFINITE:
            return "+inf %"
        if self.kind == ChangeKind.NEGATIVE_INFINITE:
            return "-inf %"
        return "/"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "value": str(self.value) if self.value is not None else None,
        }


def percentage_change(current: Number, reference: Number) -> PercentageChange:
    """
    Percentage change from reference to current, rounded to two decimals.

    A zero reference yields positive infinity for a positive current value,
    negative infinity for a negative one and zero when both are zero.
    """
    current_value = to_decimal(current)
    reference_value = to_decimal(reference)

    if reference_value != 0:
        return PercentageChange.finite(
            (current_value - reference_value) / reference_value * 100
        )

    if current_value > 0:
        return PercentageChange.positive_infinite()
    if current_value < 0:
        return PercentageChange.negative_infinite()
    return PercentageChange.finite(0)


def daily_change(stock: Stock) -> Decimal:
    """Absolute change since the day's opening price."""
    return round2(stock.price - stock.opening_price)


def daily_percentage(stock: Stock) -> PercentageChange:
    """Percentage change since the day's opening price."""
    return percentage_change(stock.price, stock.opening_price)


def window_change(stock: Stock, now: datetime, window_days: int) -> PercentageChange:
    """Percentage change against the anchor record at least window_days old."""
    anchor = stock.history.find_anchor(now, window_days)
    if anchor is None:
        return PercentageChange.unavailable()
    return percentage_change(stock.price, anchor.open)


def weekly_change(stock: Stock, now: datetime, window_days: int = WEEKLY_WINDOW_DAYS) -> PercentageChange:
    return window_change(stock, now, window_days)


def monthly_change(stock: Stock, now: datetime, window_days: int = MONTHLY_WINDOW_DAYS) -> PercentageChange:
    return window_change(stock, now, window_days)


@dataclass(frozen=True)
class StockQuote:
    """Read-only display figures for one stock at one point in time."""
    symbol: str
    name: str
    price: Decimal
    daily_change: Decimal
    direction: Direction
    daily: PercentageChange
    weekly: PercentageChange
    monthly: PercentageChange

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "price": str(self.price),
            "daily_change": str(self.daily_change),
            "direction": self.direction.value,
            "daily": self.daily.to_dict(),
            "weekly": self.weekly.to_dict(),
            "monthly": self.monthly.to_dict(),
        }


def build_quote(
    stock: Stock,
    now: datetime,
    weekly_window: int = WEEKLY_WINDOW_DAYS,
    monthly_window: int = MONTHLY_WINDOW_DAYS
) -> StockQuote:
    """Collect every display figure for a stock."""
    change = daily_change(stock)
    return StockQuote(
        symbol=stock.symbol,
        name=stock.name,
        price=stock.price,
        daily_change=change,
        direction=classify(change),
        daily=daily_percentage(stock),
        weekly=weekly_change(stock, now, weekly_window),
        monthly=monthly_change(stock, now, monthly_window),
    )
