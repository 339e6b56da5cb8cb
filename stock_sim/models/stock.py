"""
Live stock state owned by the registry.

Price fields are mutated only by the price engine; everything else reads them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..history.ledger import HistoricalLedger
from ..utils.money import Number, round2


@dataclass(frozen=True)
class StockTrend:
    """A temporary pull of a stock's price toward a target."""
    start_price: Decimal
    target_price: Decimal
    steps: int                  # Total ticks the trend lasts
    steps_taken: int = 0

    @property
    def remaining(self) -> int:
        return max(0, self.steps - self.steps_taken)

    @property
    def finished(self) -> bool:
        return self.steps_taken >= self.steps

    def advanced(self) -> "StockTrend":
        """Return the trend after one more step."""
        return StockTrend(
            start_price=self.start_price,
            target_price=self.target_price,
            steps=self.steps,
            steps_taken=self.steps_taken + 1
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_price": str(self.start_price),
            "target_price": str(self.target_price),
            "steps": self.steps,
            "steps_taken": self.steps_taken,
        }


@dataclass
class Stock:
    """A synthetic security with its current price and daily history."""

    symbol: str
    price: Decimal
    opening_price: Optional[Decimal] = None
    name: Optional[str] = None
    volatility: Optional[float] = None      # Per-stock override of the default volatility

    history: HistoricalLedger = field(default=None, repr=False)  # type: ignore[assignment]

    # Last simulated time the engine processed for this stock
    last_tick: Optional[datetime] = None

    trend: Optional[StockTrend] = None

    def __post_init__(self):
        if not self.symbol:
            raise ValueError("Stock symbol must be a non-empty string")
        self.price = round2(self.price)
        if self.price < 0:
            raise ValueError(f"Stock price must be non-negative, got {self.price}")
        self.opening_price = self.price if self.opening_price is None else round2(self.opening_price)
        if self.history is None:
            self.history = HistoricalLedger(symbol=self.symbol)
        elif self.history.symbol is None:
            self.history.symbol = self.symbol
        if self.name is None:
            self.name = self.symbol

    @classmethod
    def create(cls, symbol: str, price: Number, **kwargs: Any) -> "Stock":
        """Create a stock whose opening price equals its initial price."""
        return cls(symbol=symbol, price=round2(price), **kwargs)
