"""End-to-end tests for the market simulation coordinator."""

import pytest
from datetime import timedelta
from decimal import Decimal

from stock_sim.config.defaults import get_default_config
from stock_sim.config.loader import build_config
from stock_sim.engine import MarketSimulation
from stock_sim.errors import NonMonotonicTimeError, NotFoundError
from stock_sim.market.clock import SimulationClock
from stock_sim.metrics.changes import ChangeKind, Direction, daily_change
from stock_sim.models.stock import Stock
from stock_sim.pricing.strategies import FixedStrategy


def small_config(**market):
    values = {"stock_count": 7, "page_size": 5, "seed": 1234}
    values.update(market)
    return build_config({"market": values, "pricing": {"strategy": "random_walk"}})


class TestDayTickExample:
    """A stock at 100 that moves to 105 across a day boundary."""

    def test_day_tick(self, at):
        stock = Stock.create("ACME", 100)
        simulation = MarketSimulation(stocks=[stock], strategy=FixedStrategy({"ACME": [100, 105]}))
        simulation.tick(at(0))

        outcome, = simulation.tick(at(1))

        assert outcome.daily_change == Decimal("5.00")
        assert outcome.day_closed
        assert [(r.date, r.open) for r in stock.history] == [(at(0).date(), Decimal("100.00"))]
        assert stock.opening_price == Decimal("105.00")
        assert daily_change(stock) == Decimal("0.00")

        quote = simulation.quote("ACME", at(1))
        assert quote.weekly.kind == ChangeKind.UNAVAILABLE
        assert quote.monthly.kind == ChangeKind.UNAVAILABLE

    def test_intraday_move_after_open(self, at):
        stock = Stock.create("ACME", 100)
        simulation = MarketSimulation(stocks=[stock], strategy=FixedStrategy({"ACME": [100, 105]}))

        simulation.tick(at(0))
        simulation.tick(at(0, minute=1))

        quote = simulation.quote("ACME")
        assert quote.daily_change == Decimal("5.00")
        assert quote.direction == Direction.POSITIVE
        assert quote.daily.value == Decimal("5.00")


class TestClockDrivenSimulation:
    """Test the simulation driven through the clock."""

    def test_generated_market(self):
        simulation = MarketSimulation(small_config())

        assert len(simulation.registry) == 7
        assert simulation.get_pagination().page_count == 2

    def test_clock_drives_ticks_and_history(self, start):
        simulation = MarketSimulation(small_config())
        clock = SimulationClock(start)
        simulation.attach(clock)

        clock.run(40, delta=timedelta(days=1))

        for stock in simulation.registry.all():
            assert stock.price >= 0
            assert len(stock.history) == 39
            assert stock.last_tick == clock.now

        quotes = simulation.page_quotes()
        assert len(quotes) == 5
        assert all(q.weekly.is_available and q.monthly.is_available for q in quotes)

        last_page = simulation.pagination.next()
        assert last_page[2:] == [None, None, None]
        assert simulation.page_quotes()[2:] == [None, None, None]

    def test_detach_stops_updates(self, start):
        simulation = MarketSimulation(small_config())
        clock = SimulationClock(start)
        simulation.attach(clock)
        clock.advance()
        prices = [s.price for s in simulation.registry.all()]

        simulation.detach()
        clock.advance()
        clock.advance()

        assert clock.listener_count == 0
        assert [s.price for s in simulation.registry.all()] == prices
        simulation.detach()  # detaching twice is harmless

    def test_reattach_moves_subscription(self, start):
        simulation = MarketSimulation(small_config())
        first, second = SimulationClock(start), SimulationClock(start)

        simulation.attach(first)
        simulation.attach(second)

        assert first.listener_count == 0
        assert second.listener_count == 1

    def test_configured_volatility_range(self):
        simulation = MarketSimulation(small_config(min_volatility=0.3, max_volatility=0.3))
        assert all(s.volatility == 0.3 for s in simulation.registry.all())

    def test_same_seed_same_market(self, start):
        def run():
            simulation = MarketSimulation(small_config())
            clock = SimulationClock(start)
            simulation.attach(clock)
            clock.run(100, delta=timedelta(hours=6))
            return [(s.symbol, s.price, s.history.records()) for s in simulation.registry.all()]

        assert run() == run()

    def test_regressed_tick_rejected(self, at):
        simulation = MarketSimulation(small_config())
        simulation.tick(at(2))
        with pytest.raises(NonMonotonicTimeError):
            simulation.tick(at(1))

    def test_quote_unknown_symbol(self, at):
        simulation = MarketSimulation(small_config())
        with pytest.raises(NotFoundError):
            simulation.quote("NOPE", at(0))

    def test_quote_needs_a_time(self):
        simulation = MarketSimulation(small_config())
        symbol = simulation.registry.symbols()[0]
        with pytest.raises(ValueError):
            simulation.quote(symbol)


class TestResume:
    """Test saving and resuming a simulation."""

    def test_save_and_load_continues(self, tmp_path, start):
        config = small_config()
        simulation = MarketSimulation(config)
        clock = SimulationClock(start)
        simulation.attach(clock)
        clock.run(10, delta=timedelta(days=1))

        path = simulation.save(tmp_path / "market.json")
        resumed = MarketSimulation.load(path, config=config)

        assert resumed.snapshot() == simulation.snapshot()
        resumed_clock = SimulationClock(clock.now)
        resumed.attach(resumed_clock)
        resumed_clock.advance(timedelta(days=1))
        assert all(len(s.history) == 10 for s in resumed.registry.all())

    def test_resumed_run_continues_saved_sequence(self, tmp_path, at):
        config = small_config()
        simulation = MarketSimulation(config)
        for n in range(3):
            simulation.tick(at(n))

        resumed = MarketSimulation.load(simulation.save(tmp_path / "market.json"), config=config)
        for n in range(3, 6):
            simulation.tick(at(n))
            resumed.tick(at(n))

        assert resumed.snapshot() == simulation.snapshot()

    def test_from_snapshot(self, at):
        simulation = MarketSimulation(small_config())
        simulation.tick(at(0))
        simulation.tick(at(1))

        resumed = MarketSimulation.from_snapshot(simulation.snapshot(), config=small_config())

        assert resumed.registry.symbols() == simulation.registry.symbols()
        assert resumed.registry.last_tick == at(1)

    def test_create_from_config_dir(self, tmp_path):
        (tmp_path / "market.yaml").write_text("market:\n  stock_count: 3\n  page_size: 2\n  seed: 5\n")

        simulation = MarketSimulation.create(tmp_path)

        assert len(simulation.registry) == 3
        assert simulation.pagination.page_count == 2

    def test_default_config(self):
        simulation = MarketSimulation(stocks=[])
        assert simulation.config == get_default_config()
        assert simulation.pagination.current() == [None] * 5
