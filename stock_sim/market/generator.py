"""Seeded generation of synthetic stocks for a fresh market."""

import random
import string
from typing import Optional

import structlog

from ..models.stock import Stock
from ..utils.money import round2

logger = structlog.get_logger(__name__)

_NAME_PREFIXES = (
    "Apex", "Blue", "Crown", "Delta", "Echo", "Frontier", "Granite", "Harbor",
    "Iron", "Juniper", "Keystone", "Lumen", "Meridian", "North", "Orbit",
    "Pioneer", "Quartz", "River", "Summit", "Titan", "Union", "Vertex",
)
_NAME_SUFFIXES = (
    "Industries", "Holdings", "Systems", "Labs", "Logistics", "Energy",
    "Foods", "Motors", "Pharma", "Capital", "Textiles", "Media",
)


class StockGenerator:
    """Creates stocks with unique symbols and random opening prices."""

    def __init__(
        self,
        seed: Optional[int] = None,
        min_price: float = 5.0,
        max_price: float = 500.0,
        volatility_range: tuple[float, float] = (0.005, 0.04)
    ):
        if min_price > max_price:
            raise ValueError("min_price must not exceed max_price")
        if volatility_range[0] > volatility_range[1]:
            raise ValueError("volatility_range must be ordered (low, high)")
        self.rng = random.Random(seed)
        self.min_price = min_price
        self.max_price = max_price
        self.volatility_range = volatility_range

    def _symbol(self, taken: set[str]) -> str:
        while True:
            length = self.rng.choice((3, 4))
            symbol = "".join(self.rng.choice(string.ascii_uppercase) for _ in range(length))
            if symbol not in taken:
                return symbol

    def generate(self, count: int, taken: Optional[set[str]] = None) -> list[Stock]:
        """
        Generate count stocks whose symbols avoid the taken set.

        Args:
            count: Number of stocks to create
            taken: Symbols already in use

        Returns:
            The new stocks, in creation order
        """
        used = set(taken or ())
        stocks = []
        for _ in range(count):
            symbol = self._symbol(used)
            used.add(symbol)
            name = f"{self.rng.choice(_NAME_PREFIXES)} {self.rng.choice(_NAME_SUFFIXES)}"
            stocks.append(Stock.create(
                symbol=symbol,
                price=round2(self.rng.uniform(self.min_price, self.max_price)),
                name=name,
                volatility=round(self.rng.uniform(*self.volatility_range), 4)
            ))

        logger.info("Generated stocks", count=len(stocks))
        return stocks
