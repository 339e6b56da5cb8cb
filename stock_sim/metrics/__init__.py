"""Derived statistics over stock prices and their historical ledgers"""

from .changes import (
    ChangeKind,
    Direction,
    PercentageChange,
    StockQuote,
    build_quote,
    classify,
    daily_change,
    daily_percentage,
    monthly_change,
    percentage_change,
    weekly_change,
    window_change,
)

__all__ = [
    "ChangeKind",
    "Direction",
    "PercentageChange",
    "StockQuote",
    "build_quote",
    "classify",
    "daily_change",
    "daily_percentage",
    "monthly_change",
    "percentage_change",
    "weekly_change",
    "window_change",
]
