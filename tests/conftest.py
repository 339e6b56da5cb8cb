"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal

from stock_sim.history.ledger import HistoricalLedger
from stock_sim.history.records import HistoricalRecord
from stock_sim.market.registry import StockRegistry
from stock_sim.models.stock import Stock
from stock_sim.pricing.engine import PriceEngine
from stock_sim.pricing.strategies import FixedStrategy

START = datetime(2024, 1, 1, 9, 0, 0)


def day(n: int, hour: int = 9, minute: int = 0) -> datetime:
    """Simulated timestamp n days after the start day."""
    return START.replace(hour=hour, minute=minute) + timedelta(days=n)


def day_date(n: int) -> date:
    return day(n).date()


@pytest.fixture
def start() -> datetime:
    return START


@pytest.fixture
def ten_day_ledger() -> HistoricalLedger:
    """Ledger with one record per day for days 1..10."""
    return HistoricalLedger(
        HistoricalRecord(date=day_date(n), open=Decimal(100 + n)) for n in range(1, 11)
    )


@pytest.fixture
def acme() -> Stock:
    return Stock.create("ACME", 100, name="Acme Corporation")


@pytest.fixture
def sample_stocks() -> list[Stock]:
    """Seven stocks, enough for one full and one partial page of five."""
    return [
        Stock.create(symbol, 10 * (i + 1))
        for i, symbol in enumerate(["AAA", "BBB", "CCC", "DDD", "EEE", "FFF", "GGG"])
    ]


@pytest.fixture
def hold_engine() -> PriceEngine:
    """Engine whose strategy keeps every price unchanged."""
    return PriceEngine(FixedStrategy({}))


@pytest.fixture
def registry(sample_stocks, hold_engine) -> StockRegistry:
    return StockRegistry(hold_engine, sample_stocks)


@pytest.fixture
def at():
    """Timestamp factory: at(n, hour=9, minute=0) is n days after the start day."""
    return day
