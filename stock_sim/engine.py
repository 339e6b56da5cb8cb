"""
Main simulation coordinator.

Wires configuration, pricing strategy, price engine, stock registry and the
pagination view together, and connects them to an external clock.

Clock → Registry.tick → PriceEngine.advance (per stock) → Ledger
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import structlog

from .config.defaults import SimulationConfig, get_default_config
from .config.loader import load_config
from .logging.config import configure_logging
from .market.clock import SimulationClock, TimeChangedArgs
from .market.generator import StockGenerator
from .market.pagination import StockPagination
from .market.registry import StockRegistry
from .metrics.changes import StockQuote, build_quote
from .models.stock import Stock
from .persistence.snapshot import SnapshotStore, registry_to_snapshot, restore_registry
from .pricing.engine import AdvanceOutcome, PriceEngine
from .pricing.strategies import BasePricingStrategy, build_strategy

logger = structlog.get_logger(__name__)


class MarketSimulation:
    """
    Coordinator for a running stock market simulation.

    Owns the registry and its pagination view. The clock is optional and
    attached explicitly; without one the simulation is driven by tick().
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        stocks: Optional[Iterable[Stock]] = None,
        strategy: Optional[BasePricingStrategy] = None,
        registry: Optional[StockRegistry] = None
    ) -> None:
        """Initialize the simulation, generating stocks when none are given."""
        self.logger = logger
        self.config = config or get_default_config()

        if registry is not None:
            self.engine = registry.engine
            self.registry = registry
        else:
            self.engine = self._build_engine(strategy)
            if stocks is None:
                market = self.config.market
                generator = StockGenerator(
                    seed=market.seed,
                    min_price=market.min_initial_price,
                    max_price=market.max_initial_price,
                    volatility_range=(market.min_volatility, market.max_volatility)
                )
                stocks = generator.generate(market.stock_count)
            self.registry = StockRegistry(self.engine, stocks)

        self.pagination = StockPagination(self.registry, self.config.market.page_size)
        self.clock: Optional[SimulationClock] = None

        self.logger.info(
            "Market simulation initialized",
            stocks=len(self.registry),
            strategy=self.engine.strategy.name,
            page_size=self.pagination.page_size
        )

    @classmethod
    def create(
        cls,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> "MarketSimulation":
        """Load configuration, configure logging and start a fresh simulation."""
        config = load_config(config_dir, overrides)
        configure_logging(level=config.logging.level, format_json=config.logging.format_json)
        return cls(config=config)

    def _build_engine(self, strategy: Optional[BasePricingStrategy]) -> PriceEngine:
        if strategy is None:
            strategy = build_strategy(self.config.pricing, seed=self.config.market.seed)
        return PriceEngine(strategy, retention_days=self.config.history.retention_days)

    # Clock lifecycle

    def attach(self, clock: SimulationClock) -> None:
        """Subscribe to a clock, detaching from any previous one."""
        if self.clock is not None:
            self.detach()
        self.clock = clock
        clock.subscribe(self.on_time_changed)
        self.logger.info("Attached to clock", now=clock.now.isoformat())

    def detach(self) -> None:
        """Stop consuming time notifications."""
        if self.clock is None:
            return
        self.clock.unsubscribe(self.on_time_changed)
        self.clock = None
        self.logger.info("Detached from clock")

    def on_time_changed(self, args: TimeChangedArgs) -> None:
        self.tick(args.current)

    # Simulation

    def tick(self, now: datetime) -> list[AdvanceOutcome]:
        """Advance every stock to now."""
        return self.registry.tick(now)

    def add_stock(self, stock: Stock) -> None:
        self.registry.add(stock)

    def get_pagination(self) -> StockPagination:
        return self.pagination

    # Queries

    def _query_time(self, now: Optional[datetime]) -> datetime:
        if now is not None:
            return now
        if self.clock is not None:
            return self.clock.now
        if self.registry.last_tick is not None:
            return self.registry.last_tick
        raise ValueError("No current time: pass now, attach a clock or tick first")

    def quote(self, symbol: str, now: Optional[datetime] = None) -> StockQuote:
        """Display figures for one stock."""
        return build_quote(
            self.registry.get(symbol),
            self._query_time(now),
            weekly_window=self.config.history.weekly_window,
            monthly_window=self.config.history.monthly_window
        )

    def page_quotes(self, now: Optional[datetime] = None) -> list[Optional[StockQuote]]:
        """Display figures for the current page, None for empty slots."""
        query_time = self._query_time(now)
        return [
            build_quote(
                stock,
                query_time,
                weekly_window=self.config.history.weekly_window,
                monthly_window=self.config.history.monthly_window
            ) if stock is not None else None
            for stock in self.pagination.current()
        ]

    # Persistence

    def snapshot(self) -> dict[str, Any]:
        return registry_to_snapshot(self.registry)

    @classmethod
    def from_snapshot(
        cls,
        data: dict[str, Any],
        config: Optional[SimulationConfig] = None,
        strategy: Optional[BasePricingStrategy] = None
    ) -> "MarketSimulation":
        """
        Resume a simulation from a snapshot dictionary.

        When the snapshot carries the random state of the same strategy the
        resumed run continues the saved sequence instead of restarting it from
        the configured seed.
        """
        config = config or get_default_config()
        if strategy is None:
            strategy = build_strategy(config.pricing, seed=config.market.seed)
        engine = PriceEngine(strategy, retention_days=config.history.retention_days)
        return cls(config=config, registry=restore_registry(data, engine))

    def save(self, path: Union[str, Path]) -> Path:
        return SnapshotStore(path).save(self.registry)

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        config: Optional[SimulationConfig] = None,
        strategy: Optional[BasePricingStrategy] = None
    ) -> "MarketSimulation":
        """Resume a simulation from a snapshot file, as from_snapshot does."""
        config = config or get_default_config()
        if strategy is None:
            strategy = build_strategy(config.pricing, seed=config.market.seed)
        engine = PriceEngine(strategy, retention_days=config.history.retention_days)
        return cls(config=config, registry=SnapshotStore(path).load(engine))
