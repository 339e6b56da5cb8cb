"""
Time semantics utilities for simulated market time.

The simulation never reads the wall clock; every timestamp comes from the
external clock driving the engine.
"""

from datetime import date, datetime
from typing import Optional, Union


def to_date(value: Union[date, datetime]) -> date:
    """Reduce a timestamp to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def is_new_day(previous: Optional[datetime], current: datetime) -> bool:
    """
    Check whether moving from previous to current crosses a day boundary.

    The very first tick (no previous time) is not a day boundary since no
    trading day has been completed yet.
    """
    if previous is None:
        return False
    return current.date() > previous.date()


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp produced by format_timestamp."""
    return datetime.fromisoformat(value)


def format_timestamp(value: datetime) -> str:
    """
    Format a simulated timestamp for snapshots and logging.

    Returns:
        ISO8601 formatted string
    """
    return value.isoformat()
