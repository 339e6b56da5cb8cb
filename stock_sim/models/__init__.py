"""
Domain models for the simulation.

Stocks are mutable live state owned by the registry; historical records and
trends are immutable values.
"""

from ..history.records import HistoricalRecord
from .stock import Stock, StockTrend

__all__ = ["HistoricalRecord", "Stock", "StockTrend"]
