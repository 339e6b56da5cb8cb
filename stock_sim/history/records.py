"""Immutable historical record of a stock's trading day."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from ..utils.money import Number, round2


@dataclass(frozen=True)
class HistoricalRecord:
    """Opening price of one completed trading day."""
    date: date          # Trading day the record represents
    open: Decimal       # Opening price of that day

    def __post_init__(self):
        price = round2(self.open)
        if price < 0:
            raise ValueError(f"Historical open must be non-negative, got {self.open}")
        object.__setattr__(self, "open", price)

    @classmethod
    def create(cls, record_date: date, open_price: Number) -> "HistoricalRecord":
        return cls(date=record_date, open=round2(open_price))

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "open": str(self.open)}
