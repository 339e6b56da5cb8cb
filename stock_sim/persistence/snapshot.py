"""
Registry snapshots for saving and resuming a simulation.

Snapshots are plain JSON-safe dictionaries: prices as decimal strings, dates
and timestamps as ISO-8601. Restoring reproduces every stock's prices, last
tick, trend and full history sequence exactly. The pricing strategy's random
state is saved alongside so a resumed run continues the saved sequence.
"""

import json
import os
import tempfile
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from ..errors import PersistenceError, SimulationError, SnapshotError
from ..history.ledger import HistoricalLedger
from ..market.registry import StockRegistry
from ..history.records import HistoricalRecord
from ..models.stock import Stock, StockTrend
from ..pricing.engine import PriceEngine
from ..utils.time import format_timestamp, parse_timestamp

logger = structlog.get_logger(__name__)

SNAPSHOT_VERSION = 1


def _stock_to_dict(stock: Stock) -> dict[str, Any]:
    return {
        "symbol": stock.symbol,
        "name": stock.name,
        "price": str(stock.price),
        "opening_price": str(stock.opening_price),
        "volatility": stock.volatility,
        "last_tick": format_timestamp(stock.last_tick) if stock.last_tick else None,
        "trend": stock.trend.to_dict() if stock.trend else None,
        "history": [record.to_dict() for record in stock.history],
    }


def registry_to_snapshot(registry: StockRegistry) -> dict[str, Any]:
    """Serialize the registry state into a JSON-safe dictionary."""
    return {
        "version": SNAPSHOT_VERSION,
        "last_tick": format_timestamp(registry.last_tick) if registry.last_tick else None,
        "stocks": [_stock_to_dict(stock) for stock in registry.all()],
        "strategy": registry.engine.strategy.get_state(),
    }


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise SnapshotError(f"Snapshot entry is missing '{key}'", field=key)
    return data[key]


def _decimal(value: Any, key: str) -> Decimal:
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise SnapshotError(f"Invalid decimal for '{key}': {value!r}", field=key) from e
    if not result.is_finite():
        raise SnapshotError(f"Non-finite decimal for '{key}': {value!r}", field=key)
    return result


def _timestamp(value: Optional[str], key: str) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return parse_timestamp(value)
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"Invalid timestamp for '{key}': {value!r}", field=key) from e


def _record_from_dict(data: dict[str, Any]) -> HistoricalRecord:
    try:
        record_date = date.fromisoformat(_require(data, "date"))
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"Invalid record date: {data.get('date')!r}", field="date") from e
    try:
        return HistoricalRecord(date=record_date, open=_decimal(_require(data, "open"), "open"))
    except (ArithmeticError, ValueError) as e:
        raise SnapshotError(str(e), field="open") from e


def _trend_from_dict(data: Optional[dict[str, Any]]) -> Optional[StockTrend]:
    if data is None:
        return None
    return StockTrend(
        start_price=_decimal(_require(data, "start_price"), "start_price"),
        target_price=_decimal(_require(data, "target_price"), "target_price"),
        steps=int(_require(data, "steps")),
        steps_taken=int(data.get("steps_taken", 0))
    )


def _stock_from_dict(data: dict[str, Any]) -> Stock:
    symbol = _require(data, "symbol")
    try:
        ledger = HistoricalLedger(
            (_record_from_dict(record) for record in data.get("history", [])),
            symbol=symbol
        )
        return Stock(
            symbol=symbol,
            name=data.get("name"),
            price=_decimal(_require(data, "price"), "price"),
            opening_price=_decimal(_require(data, "opening_price"), "opening_price"),
            volatility=data.get("volatility"),
            history=ledger,
            last_tick=_timestamp(data.get("last_tick"), "last_tick"),
            trend=_trend_from_dict(data.get("trend"))
        )
    except SimulationError as e:
        raise SnapshotError(f"Inconsistent snapshot for {symbol}: {e}", field="history") from e
    except (ArithmeticError, ValueError) as e:
        raise SnapshotError(f"Invalid stock {symbol}: {e}", field="price") from e


def _restore_strategy(engine: PriceEngine, state: Any) -> None:
    if not isinstance(state, dict):
        raise SnapshotError("Strategy state must be a mapping", field="strategy")
    if state.get("strategy") != engine.strategy.name:
        logger.warning(
            "Snapshot strategy differs, starting a fresh random sequence",
            saved=state.get("strategy"),
            current=engine.strategy.name
        )
        return
    try:
        engine.strategy.set_state(state)
    except ValueError as e:
        raise SnapshotError(f"Invalid strategy state: {e}", field="strategy") from e


def restore_registry(data: dict[str, Any], engine: PriceEngine) -> StockRegistry:
    """
    Rebuild a registry from a snapshot.

    Raises:
        SnapshotError: The snapshot is malformed or has an unsupported version
    """
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a mapping")

    version = data.get("version")
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(
            f"Unsupported snapshot version: {version!r}",
            field="version",
            context={"expected": SNAPSHOT_VERSION}
        )

    stocks = [_stock_from_dict(entry) for entry in _require(data, "stocks")]
    try:
        registry = StockRegistry(engine, stocks)
    except SimulationError as e:
        raise SnapshotError(f"Inconsistent snapshot: {e}", field="stocks") from e
    registry.last_tick = _timestamp(data.get("last_tick"), "last_tick")
    if data.get("strategy") is not None:
        _restore_strategy(engine, data["strategy"])

    logger.info(
        "Restored registry from snapshot",
        stocks=len(registry),
        last_tick=data.get("last_tick")
    )
    return registry


class SnapshotStore:
    """JSON file storage for registry snapshots."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.logger = logger

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, registry: StockRegistry) -> Path:
        """
        Write the registry snapshot atomically.

        Raises:
            PersistenceError: The file could not be written
        """
        snapshot = registry_to_snapshot(registry)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w") as f:
                    json.dump(snapshot, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise PersistenceError(
                f"Failed to save snapshot: {e}",
                operation="save",
                target=str(self.path)
            ) from e

        self.logger.info("Snapshot saved", path=str(self.path), stocks=len(registry))
        return self.path

    def load(self, engine: PriceEngine) -> StockRegistry:
        """
        Read a snapshot file and rebuild the registry.

        Raises:
            PersistenceError: The file could not be read
            SnapshotError: The file content is not a valid snapshot
        """
        try:
            with open(self.path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotError(
                f"Snapshot file is not valid JSON: {e}",
                target=str(self.path)
            ) from e
        except OSError as e:
            raise PersistenceError(
                f"Failed to load snapshot: {e}",
                operation="load",
                target=str(self.path)
            ) from e

        return restore_registry(data, engine)
