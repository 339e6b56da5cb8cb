"""
Date-ordered historical ledger for a single stock.

Records are kept sorted ascending by date in parallel lists so anchor
lookups are a single bisect instead of a scan of the full history.
"""

from bisect import bisect_left, bisect_right, insort
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, Optional, Union

import structlog

from ..errors import DuplicateDateError
from ..utils.time import to_date
from .records import HistoricalRecord

logger = structlog.get_logger(__name__)


class HistoricalLedger:
    """Append-only store of HistoricalRecords keyed by date."""

    def __init__(self, records: Iterable[HistoricalRecord] = (), symbol: Optional[str] = None):
        self.symbol = symbol
        self._dates: list[date] = []
        self._records: list[HistoricalRecord] = []
        for record in records:
            self.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[HistoricalRecord]:
        return iter(list(self._records))

    def __bool__(self) -> bool:
        return bool(self._records)

    def records(self) -> tuple[HistoricalRecord, ...]:
        """All records, ascending by date."""
        return tuple(self._records)

    def iter_descending(self) -> Iterator[HistoricalRecord]:
        """Iterate records from the most recent to the oldest."""
        return reversed(list(self._records))

    def latest(self) -> Optional[HistoricalRecord]:
        """Most recent record, None for an empty ledger."""
        return self._records[-1] if self._records else None

    def append(self, record: HistoricalRecord) -> None:
        """
        Add a record, keeping the ledger ordered by date.

        Raises:
            DuplicateDateError: A record for the same date already exists
        """
        index = bisect_left(self._dates, record.date)
        if index < len(self._dates) and self._dates[index] == record.date:
            raise DuplicateDateError(
                f"Historical record for {record.date.isoformat()} already exists",
                record_date=record.date,
                symbol=self.symbol,
                context={"existing_open": str(self._records[index].open),
                         "new_open": str(record.open)}
            )

        if index == len(self._dates):
            self._dates.append(record.date)
            self._records.append(record)
        else:
            insort(self._dates, record.date)
            self._records.insert(index, record)

    def find_anchor(
        self,
        current_date: Union[date, datetime],
        min_days_ago: int
    ) -> Optional[HistoricalRecord]:
        """
        Find the most recent record that is at least min_days_ago days old.

        A record qualifies when (current_date - record.date) in whole days is
        greater than or equal to min_days_ago. The anchor is therefore not the
        exact window boundary but the newest record at or before it.

        Args:
            current_date: Current simulated time
            min_days_ago: Minimum record age in days

        Returns:
            The anchor record, or None when the history is younger than the window
        """
        cutoff = to_date(current_date) - timedelta(days=min_days_ago)
        index = bisect_right(self._dates, cutoff)
        if index == 0:
            return None
        return self._records[index - 1]

    def prune(self, current_date: Union[date, datetime], retention_days: int) -> int:
        """
        Drop records older than the retention window.

        The newest record older than the cutoff is kept so that any window of
        up to retention_days still resolves the same anchor as before pruning.

        Returns:
            Number of records removed
        """
        cutoff = to_date(current_date) - timedelta(days=retention_days)
        older = bisect_left(self._dates, cutoff)
        removable = older - 1
        if removable <= 0:
            return 0

        del self._dates[:removable]
        del self._records[:removable]

        logger.debug(
            "Pruned historical records",
            symbol=self.symbol,
            removed=removable,
            remaining=len(self._records),
            retention_days=retention_days
        )
        return removable
