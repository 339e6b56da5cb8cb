"""
Paged view over the registry's ordered stocks.

Boundary policy is wraparound: moving past the last page returns to the
first one and moving before the first page goes to the last one. Every page
has exactly page_size slots; slots past the end of the registry are None.
"""

import math
from typing import Optional

from ..models.stock import Stock
from .registry import StockRegistry

Page = list[Optional[Stock]]


class StockPagination:
    """Cursor over fixed-size pages of stocks."""

    def __init__(self, registry: StockRegistry, page_size: int = 5):
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.registry = registry
        self.page_size = page_size
        self._page = 0

    @property
    def page_count(self) -> int:
        """Number of pages; an empty registry still has one (empty) page."""
        return max(1, math.ceil(len(self.registry) / self.page_size))

    def _clamped_index(self) -> int:
        # The registry may have changed size since the cursor last moved
        return min(self._page, self.page_count - 1)

    @property
    def page_index(self) -> int:
        return self._clamped_index()

    def current(self) -> Page:
        """Slots of the page under the cursor."""
        start = self.page_index * self.page_size
        stocks: Page = list(self.registry.all()[start:start + self.page_size])
        stocks.extend([None] * (self.page_size - len(stocks)))
        return stocks

    def next(self) -> Page:
        """Move to the following page, wrapping to the first."""
        self._page = (self.page_index + 1) % self.page_count
        return self.current()

    def previous(self) -> Page:
        """Move to the preceding page, wrapping to the last."""
        self._page = (self.page_index - 1) % self.page_count
        return self.current()

    def reset(self) -> Page:
        self._page = 0
        return self.current()
