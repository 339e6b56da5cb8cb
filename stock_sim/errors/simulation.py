"""
Simulation error classifications.

These exceptions signal programmer or data errors in the use of the
simulation core: ticks that do not advance time, ledger collisions and
lookups of unknown symbols.
"""

from datetime import date, datetime
from typing import Any, Dict, Optional


class SimulationError(Exception):
    """Base class for errors raised by the simulation core."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class NonMonotonicTimeError(SimulationError):
    """A tick was requested with a time that does not strictly advance."""

    def __init__(self, message: str, now: Optional[datetime] = None,
                 last_tick: Optional[datetime] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.now = now
        self.last_tick = last_tick


class DuplicateDateError(SimulationError):
    """A historical record for the same date already exists in the ledger."""

    def __init__(self, message: str, record_date: Optional[date] = None,
                 symbol: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.record_date = record_date
        self.symbol = symbol


class NotFoundError(SimulationError):
    """Lookup of a symbol the registry does not know."""

    def __init__(self, message: str, symbol: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol


class DuplicateSymbolError(SimulationError):
    """A symbol that was already registered was added again."""

    def __init__(self, message: str, symbol: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol
