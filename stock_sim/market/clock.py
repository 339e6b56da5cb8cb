"""
Simulation clock delivering time-changed notifications.

The clock is injected into consumers instead of being a process-wide
singleton, so tests can drive the market with synthetic timestamps.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

import structlog

from ..errors import NonMonotonicTimeError
from ..utils.time import is_new_day

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TimeChangedArgs:
    """Payload of a time-changed notification."""
    previous: Optional[datetime]
    current: datetime

    @property
    def is_new_day(self) -> bool:
        return is_new_day(self.previous, self.current)


TimeListener = Callable[[TimeChangedArgs], None]


class SimulationClock:
    """Monotonic simulated clock with explicit listener subscription."""

    def __init__(self, start: datetime):
        self.logger = logger
        self.now = start
        self._listeners: list[TimeListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: TimeListener) -> None:
        """Register a listener; subscribing twice has no effect."""
        if listener not in self._listeners:
            self._listeners.append(listener)
            self.logger.debug("Clock listener subscribed", listeners=len(self._listeners))

    def unsubscribe(self, listener: TimeListener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)
            self.logger.debug("Clock listener unsubscribed", listeners=len(self._listeners))

    def set_time(self, now: datetime) -> TimeChangedArgs:
        """
        Move the clock to a later time and notify listeners.

        Raises:
            NonMonotonicTimeError: now is not later than the current time
        """
        if now <= self.now:
            raise NonMonotonicTimeError(
                f"Clock cannot move from {self.now.isoformat()} to {now.isoformat()}",
                now=now,
                last_tick=self.now
            )

        args = TimeChangedArgs(previous=self.now, current=now)
        self.now = now

        # Listeners may unsubscribe themselves while being notified
        for listener in list(self._listeners):
            listener(args)

        return args

    def advance(self, delta: timedelta = timedelta(minutes=1)) -> TimeChangedArgs:
        """Move the clock forward by delta."""
        return self.set_time(self.now + delta)

    def run(self, steps: int, delta: timedelta = timedelta(minutes=1)) -> datetime:
        """Advance the clock steps times and return the final time."""
        for _ in range(steps):
            self.advance(delta)
        return self.now
