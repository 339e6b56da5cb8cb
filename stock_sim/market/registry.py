"""
Stock registry owning every stock and its ledger.

The registry's tick is the only mutation entrypoint driven by the clock: it
validates the new time against every stock before advancing any of them, so a
rejected tick leaves the whole market untouched.
"""

from datetime import datetime
from typing import Iterable, Iterator, Optional

import structlog

from ..errors import DuplicateSymbolError, NonMonotonicTimeError, NotFoundError
from ..logging.config import get_tick_logger
from ..models.stock import Stock
from ..pricing.engine import AdvanceOutcome, PriceEngine

logger = structlog.get_logger(__name__)
tick_logger = get_tick_logger(__name__)


class StockRegistry:
    """Ordered collection of stocks keyed by symbol."""

    def __init__(self, engine: PriceEngine, stocks: Iterable[Stock] = ()):
        self.logger = logger
        self.tick_logger = tick_logger
        self.engine = engine
        self._stocks: dict[str, Stock] = {}
        self._known_symbols: set[str] = set()
        self.last_tick: Optional[datetime] = None

        for stock in stocks:
            self.add(stock)

    def __len__(self) -> int:
        return len(self._stocks)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._stocks

    def __iter__(self) -> Iterator[Stock]:
        return iter(self.all())

    def add(self, stock: Stock) -> None:
        """
        Register a stock.

        Raises:
            DuplicateSymbolError: The symbol was registered before
        """
        if stock.symbol in self._known_symbols:
            raise DuplicateSymbolError(
                f"Symbol {stock.symbol} is already registered",
                symbol=stock.symbol
            )

        self._known_symbols.add(stock.symbol)
        self._stocks[stock.symbol] = stock

        self.logger.info(
            "Added stock to registry",
            symbol=stock.symbol,
            price=str(stock.price),
            history_records=len(stock.history)
        )

    def all(self) -> list[Stock]:
        """Stocks in registration order."""
        return list(self._stocks.values())

    def symbols(self) -> list[str]:
        return list(self._stocks.keys())

    def get(self, symbol: str) -> Stock:
        """
        Look up a stock by symbol.

        Raises:
            NotFoundError: The symbol is unknown
        """
        try:
            return self._stocks[symbol]
        except KeyError:
            raise NotFoundError(f"Unknown stock symbol: {symbol}", symbol=symbol) from None

    def tick(self, now: datetime) -> list[AdvanceOutcome]:
        """
        Advance every stock exactly once to the given time.

        Time is checked for every stock before any is advanced. A stock whose
        strategy raises is left unchanged while stocks before it keep their
        new state; a later tick brings every stock to the same time.

        Raises:
            NonMonotonicTimeError: now does not advance past the last processed tick
        """
        if self.last_tick is not None and now <= self.last_tick:
            raise NonMonotonicTimeError(
                f"Tick at {now.isoformat()} does not advance past {self.last_tick.isoformat()}",
                now=now,
                last_tick=self.last_tick
            )

        stocks = self.all()
        for stock in stocks:
            self.engine.check_time(stock, now)

        outcomes = [self.engine.advance(stock, stock.history, now) for stock in stocks]
        self.last_tick = now

        closed = sum(1 for outcome in outcomes if outcome.day_closed)
        if closed:
            self.tick_logger.info(
                "Trading day committed",
                timestamp=now.isoformat(),
                stocks=len(outcomes),
                records_committed=closed
            )
        else:
            self.tick_logger.debug(
                "Processed tick",
                timestamp=now.isoformat(),
                stocks=len(outcomes)
            )

        return outcomes
