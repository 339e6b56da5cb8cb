"""
Price engine applying a pricing strategy to one stock per tick.

On a day boundary the opening price of the day that just ended is committed
to the stock's ledger before the opening price is reset for the new day.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

import structlog

from ..errors import NonMonotonicTimeError
from ..history.ledger import HistoricalLedger
from ..logging.config import log_day_close
from ..history.records import HistoricalRecord
from ..models.stock import Stock
from ..utils.money import Number, round2, to_decimal
from ..utils.time import is_new_day
from .strategies import BasePricingStrategy

logger = structlog.get_logger(__name__)

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class AdvanceOutcome:
    """Result of advancing a single stock by one tick."""
    symbol: str
    timestamp: datetime
    previous_price: Decimal
    price: Decimal
    daily_change: Decimal                   # Against the opening price before any reset
    day_closed: bool = False
    closed_record: Optional[HistoricalRecord] = None
    pruned_records: int = 0


class PriceEngine:
    """Advances stocks with a pluggable pricing strategy."""

    def __init__(self, strategy: BasePricingStrategy, retention_days: Optional[int] = None):
        self.logger = logger
        self.strategy = strategy
        self.retention_days = retention_days

    def check_time(self, stock: Stock, now: datetime) -> None:
        """
        Reject ticks that do not strictly advance the stock's clock.

        Raises:
            NonMonotonicTimeError: now is identical to or earlier than the last tick
        """
        if stock.last_tick is not None and now <= stock.last_tick:
            raise NonMonotonicTimeError(
                f"Tick at {now.isoformat()} does not advance past "
                f"{stock.last_tick.isoformat()} for {stock.symbol}",
                now=now,
                last_tick=stock.last_tick,
                context={"symbol": stock.symbol}
            )

    def advance(self, stock: Stock, ledger: HistoricalLedger, now: datetime) -> AdvanceOutcome:
        """
        Advance a stock by one simulated time unit.

        The stock and its ledger are only written once the strategy has produced
        a price, so a failing strategy or a ledger collision leaves both as they
        were.

        Args:
            stock: Stock to mutate
            ledger: The stock's historical ledger
            now: Current simulated time

        Returns:
            AdvanceOutcome describing the applied move
        """
        self.check_time(stock, now)

        previous_tick = stock.last_tick
        previous_price = stock.price
        opening_price = stock.opening_price
        previous_trend = stock.trend

        record = None
        if is_new_day(previous_tick, now):
            record = HistoricalRecord(date=previous_tick.date(), open=opening_price)

        # Strategies read the updated trend while pricing
        stock.trend = self.strategy.next_trend(stock)
        try:
            price = self._settle(stock, self.strategy.next_price(stock))
            if record is not None:
                ledger.append(record)
        except Exception:
            stock.trend = previous_trend
            raise

        stock.price = price
        stock.last_tick = now

        pruned = 0
        if record is not None:
            stock.opening_price = stock.price
            log_day_close(
                self.logger,
                symbol=stock.symbol,
                record_date=record.date,
                open_price=record.open,
                close_price=stock.price
            )
            pruned = self._prune(ledger, now)

        return AdvanceOutcome(
            symbol=stock.symbol,
            timestamp=now,
            previous_price=previous_price,
            price=stock.price,
            daily_change=round2(stock.price - opening_price),
            day_closed=record is not None,
            closed_record=record,
            pruned_records=pruned
        )

    def _settle(self, stock: Stock, proposed: Number) -> Decimal:
        """
        Turn a strategy proposal into a valid price.

        Negative values (including -inf) clamp to zero. NaN and +inf carry no
        usable price, so the stock keeps its current one.
        """
        value = to_decimal(proposed)
        if value.is_nan() or value == Decimal("Infinity"):
            self.logger.warning(
                "Discarded non-finite price proposal",
                symbol=stock.symbol,
                proposed=str(proposed),
                kept=str(stock.price)
            )
            return stock.price
        if value <= 0:
            return ZERO
        value = round2(value)
        return value if value > 0 else ZERO

    def _prune(self, ledger: HistoricalLedger, now: datetime) -> int:
        if self.retention_days is None:
            return 0
        return ledger.prune(now, self.retention_days)
