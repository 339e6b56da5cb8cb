"""
Pricing strategies producing the next price of a stock.

Strategies only propose values. The engine clamps negative proposals to zero,
rounds to two decimals and writes the result to the stock. Every random
strategy owns its own random.Random so a seed reproduces the whole run.
"""

import random
from abc import ABC, abstractmethod
from collections import deque
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from ..config.defaults import PricingParams
from ..models.stock import Stock, StockTrend
from ..utils.money import Number, round2, to_decimal


class BasePricingStrategy(ABC):
    """Base class for price movement rules."""

    name = "base"

    @abstractmethod
    def next_price(self, stock: Stock) -> Number:
        """
        Propose the stock's next price.

        Args:
            stock: Stock in its current state (trend already updated for this tick)

        Returns:
            Proposed price; may be negative, the engine clamps it
        """

    def next_trend(self, stock: Stock) -> Optional[StockTrend]:
        """Return the trend in effect for the upcoming tick."""
        return stock.trend

    def get_state(self) -> Optional[dict[str, Any]]:
        """JSON-safe generator state, or None when the strategy keeps none."""
        return None

    def set_state(self, state: dict[str, Any]) -> None:
        """Restore state produced by get_state."""


class FixedStrategy(BasePricingStrategy):
    """Scripted prices per symbol, holding the last price once a script runs out."""

    name = "fixed"

    def __init__(self, prices: Mapping[str, Iterable[Number]]):
        self._scripts = {symbol: deque(values) for symbol, values in prices.items()}

    def next_price(self, stock: Stock) -> Number:
        script = self._scripts.get(stock.symbol)
        if not script:
            return stock.price
        return script.popleft()


class RandomWalkStrategy(BasePricingStrategy):
    """Gaussian relative move scaled by the stock's volatility."""

    name = "random_walk"

    def __init__(self, seed: Optional[int] = None, default_volatility: float = 0.02):
        self.seed = seed
        self.default_volatility = default_volatility
        self.rng = random.Random(seed)

    def volatility_of(self, stock: Stock) -> float:
        if stock.volatility is not None:
            return stock.volatility
        return self.default_volatility

    def next_price(self, stock: Stock) -> Number:
        move = self.rng.gauss(0.0, self.volatility_of(stock))
        return to_decimal(float(stock.price) * (1.0 + move))

    def get_state(self) -> Optional[dict[str, Any]]:
        version, internal, gauss_next = self.rng.getstate()
        return {"strategy": self.name, "rng": [version, list(internal), gauss_next]}

    def set_state(self, state: dict[str, Any]) -> None:
        """
        Continue the random sequence saved by get_state.

        Raises:
            ValueError: The state belongs to another strategy or is malformed
        """
        if state.get("strategy") != self.name:
            raise ValueError(f"State of {state.get('strategy')!r} cannot resume {self.name!r}")
        try:
            version, internal, gauss_next = state["rng"]
            self.rng.setstate((version, tuple(internal), gauss_next))
        except (KeyError, OverflowError, TypeError) as e:
            raise ValueError(f"Malformed generator state: {e}") from e


class TrendStrategy(RandomWalkStrategy):
    """
    Random walk with occasional trends.

    On any tick without a trend there is a trend_chance probability that the
    stock starts moving toward a target up to trend_max_pct away over a random
    number of steps. While a trend runs the price follows the straight line
    from the trend's start price to its target with dampened noise around it.
    """

    name = "trend"

    def __init__(
        self,
        seed: Optional[int] = None,
        default_volatility: float = 0.02,
        trend_chance: float = 0.01,
        trend_min_steps: int = 60,
        trend_max_steps: int = 1440,
        trend_max_pct: float = 0.25
    ):
        super().__init__(seed=seed, default_volatility=default_volatility)
        self.trend_chance = trend_chance
        self.trend_min_steps = trend_min_steps
        self.trend_max_steps = trend_max_steps
        self.trend_max_pct = trend_max_pct

    def next_trend(self, stock: Stock) -> Optional[StockTrend]:
        trend = stock.trend
        if trend is not None and not trend.finished:
            return trend.advanced()

        if self.rng.random() >= self.trend_chance:
            return None

        pct = self.rng.uniform(-self.trend_max_pct, self.trend_max_pct)
        return StockTrend(
            start_price=stock.price,
            target_price=round2(float(stock.price) * (1.0 + pct)),
            steps=self.rng.randint(self.trend_min_steps, self.trend_max_steps),
            steps_taken=1
        )

    def next_price(self, stock: Stock) -> Number:
        trend = stock.trend
        if trend is None:
            return super().next_price(stock)

        progress = Decimal(trend.steps_taken) / Decimal(trend.steps)
        expected = trend.start_price + (trend.target_price - trend.start_price) * progress
        noise = self.rng.gauss(0.0, self.volatility_of(stock) / 4)
        return to_decimal(float(expected) * (1.0 + noise))


def build_strategy(params: PricingParams, seed: Optional[int] = None) -> BasePricingStrategy:
    """Create the strategy named in the pricing configuration."""
    if params.strategy == "random_walk":
        return RandomWalkStrategy(seed=seed, default_volatility=params.default_volatility)
    if params.strategy == "trend":
        return TrendStrategy(
            seed=seed,
            default_volatility=params.default_volatility,
            trend_chance=params.trend_chance,
            trend_min_steps=params.trend_min_steps,
            trend_max_steps=params.trend_max_steps,
            trend_max_pct=params.trend_max_pct
        )
    raise ValueError(f"Unknown pricing strategy: {params.strategy!r}")
