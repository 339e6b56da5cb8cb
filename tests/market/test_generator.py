"""Tests for synthetic stock generation."""

import pytest
from decimal import Decimal

from stock_sim.market.generator import StockGenerator


class TestStockGenerator:
    """Test seeded stock generation."""

    def test_unique_symbols(self):
        stocks = StockGenerator(seed=1).generate(200)
        assert len({s.symbol for s in stocks}) == 200

    def test_avoids_taken_symbols(self):
        first = StockGenerator(seed=1).generate(5)
        taken = {s.symbol for s in first}
        second = StockGenerator(seed=1).generate(5, taken=taken)
        assert taken.isdisjoint(s.symbol for s in second)

    def test_seed_reproducible(self):
        a = StockGenerator(seed=3).generate(10)
        b = StockGenerator(seed=3).generate(10)
        assert [(s.symbol, s.price, s.name) for s in a] == [(s.symbol, s.price, s.name) for s in b]

    def test_prices_in_range_and_opening_matches(self):
        for stock in StockGenerator(seed=4, min_price=10, max_price=20).generate(50):
            assert Decimal("10") <= stock.price <= Decimal("20")
            assert stock.opening_price == stock.price
            assert len(stock.history) == 0
            assert stock.volatility is not None

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            StockGenerator(min_price=10, max_price=5)

    def test_volatility_in_range(self):
        for stock in StockGenerator(seed=5, volatility_range=(0.1, 0.2)).generate(50):
            assert 0.1 <= stock.volatility <= 0.2

    def test_invalid_volatility_range(self):
        with pytest.raises(ValueError):
            StockGenerator(volatility_range=(0.2, 0.1))
