"""
Error classification system for the simulation engine.

Simulation errors are caller or data errors that propagate to the caller.
Arithmetic edge cases in the statistics layer are never errors; they are
represented as sentinel results instead.
"""

from .simulation import (
    SimulationError,
    NonMonotonicTimeError,
    DuplicateDateError,
    NotFoundError,
    DuplicateSymbolError,
)
from .system_failures import (
    SystemFailureError,
    PersistenceError,
    SnapshotError,
    ConfigurationError,
)

__all__ = [
    # Simulation Errors
    "SimulationError",
    "NonMonotonicTimeError",
    "DuplicateDateError",
    "NotFoundError",
    "DuplicateSymbolError",
    # System Failures
    "SystemFailureError",
    "PersistenceError",
    "SnapshotError",
    "ConfigurationError",
]
