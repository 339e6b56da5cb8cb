"""Tests for the historical ledger."""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal

from stock_sim.errors import DuplicateDateError
from stock_sim.history.ledger import HistoricalLedger
from stock_sim.history.records import HistoricalRecord


def record(d: date, price) -> HistoricalRecord:
    return HistoricalRecord(date=d, open=Decimal(str(price)))


class TestHistoricalRecord:
    """Test HistoricalRecord values."""

    def test_open_rounded_to_two_decimals(self):
        rec = HistoricalRecord(date=date(2024, 1, 1), open=Decimal("10.005"))
        assert rec.open == Decimal("10.00")  # banker's rounding

    def test_negative_open_rejected(self):
        with pytest.raises(ValueError):
            HistoricalRecord(date=date(2024, 1, 1), open=Decimal("-1"))

    def test_immutable(self):
        rec = HistoricalRecord(date=date(2024, 1, 1), open=Decimal("10"))
        with pytest.raises(AttributeError):
            rec.open = Decimal("11")

    def test_to_dict(self):
        rec = HistoricalRecord.create(date(2024, 1, 2), 12.5)
        assert rec.to_dict() == {"date": "2024-01-02", "open": "12.50"}


class TestAppend:
    """Test appending records."""

    def test_append_keeps_order(self):
        ledger = HistoricalLedger()
        ledger.append(record(date(2024, 1, 1), 10))
        ledger.append(record(date(2024, 1, 2), 11))

        assert [r.date for r in ledger] == [date(2024, 1, 1), date(2024, 1, 2)]
        assert ledger.latest().open == Decimal("11.00")
        assert len(ledger) == 2

    def test_out_of_order_append_is_sorted(self):
        ledger = HistoricalLedger()
        ledger.append(record(date(2024, 1, 3), 13))
        ledger.append(record(date(2024, 1, 1), 11))
        ledger.append(record(date(2024, 1, 2), 12))

        assert [r.date.day for r in ledger] == [1, 2, 3]
        assert [r.date.day for r in ledger.iter_descending()] == [3, 2, 1]

    def test_duplicate_date_rejected(self):
        """Appending two records with identical dates fails."""
        ledger = HistoricalLedger(symbol="ACME")
        ledger.append(record(date(2024, 1, 1), 10))

        with pytest.raises(DuplicateDateError) as exc_info:
            ledger.append(record(date(2024, 1, 1), 99))

        assert exc_info.value.record_date == date(2024, 1, 1)
        assert exc_info.value.symbol == "ACME"
        assert len(ledger) == 1
        assert ledger.latest().open == Decimal("10.00")

    def test_duplicate_in_constructor_rejected(self):
        with pytest.raises(DuplicateDateError):
            HistoricalLedger([record(date(2024, 1, 1), 1), record(date(2024, 1, 1), 2)])

    def test_records_returns_copy(self):
        ledger = HistoricalLedger([record(date(2024, 1, 1), 1)])
        records = ledger.records()
        assert isinstance(records, tuple)
        ledger.append(record(date(2024, 1, 2), 2))
        assert len(records) == 1


class TestFindAnchor:
    """Test anchor selection for window comparisons."""

    def test_week_anchor_is_record_exactly_seven_days_old(self, ten_day_ledger, at):
        """With records for days 1..10, now = day 10 anchors on day 3, not day 4."""
        anchor = ten_day_ledger.find_anchor(at(10), 7)

        assert anchor is not None
        assert anchor.date == at(3).date()
        assert anchor.open == Decimal("103.00")

    def test_time_of_day_does_not_change_age(self, ten_day_ledger, at):
        anchor = ten_day_ledger.find_anchor(at(10, hour=23, minute=59), 7)
        assert anchor.date == at(3).date()

    def test_accepts_plain_date(self, ten_day_ledger, at):
        assert ten_day_ledger.find_anchor(at(10).date(), 7).date == at(3).date()

    def test_most_recent_older_record_when_gap(self, at):
        """The anchor is the newest record at or before the boundary, not the exact one."""
        ledger = HistoricalLedger([
            record(at(0).date(), 50),
            record(at(1).date(), 51),
            record(at(9).date(), 59),
        ])

        anchor = ledger.find_anchor(at(10), 7)

        assert anchor.date == at(1).date()

    def test_history_younger_than_window(self, ten_day_ledger, at):
        assert ten_day_ledger.find_anchor(at(10), 30) is None
        assert ten_day_ledger.find_anchor(at(7), 7) is None

    def test_empty_ledger(self, at):
        assert HistoricalLedger().find_anchor(at(10), 7) is None

    def test_zero_window_returns_latest_not_in_future(self, ten_day_ledger, at):
        assert ten_day_ledger.find_anchor(at(5), 0).date == at(5).date()

    def test_month_anchor(self, at):
        ledger = HistoricalLedger(record(at(n).date(), n + 1) for n in range(45))

        anchor = ledger.find_anchor(at(44), 30)

        assert anchor.date == at(14).date()


class TestPrune:
    """Test retention pruning."""

    def test_prune_keeps_newest_record_older_than_cutoff(self, at):
        ledger = HistoricalLedger(record(at(n).date(), n + 1) for n in range(100))

        removed = ledger.prune(at(99), 60)

        # Cutoff is day 39; day 38 is kept as the last record older than it
        assert removed == 38
        assert ledger.records()[0].date == at(38).date()
        assert ledger.find_anchor(at(99), 60).date == at(39).date()

    def test_prune_preserves_anchor_across_gap(self, at):
        ledger = HistoricalLedger([
            record(at(0).date(), 1),
            record(at(10).date(), 2),
            record(at(70).date(), 3),
        ])
        before = ledger.find_anchor(at(75), 30)

        ledger.prune(at(75), 60)

        assert ledger.find_anchor(at(75), 30) == before
        assert before.date == at(10).date()
        assert [r.date for r in ledger] == [at(10).date(), at(70).date()]

    def test_prune_noop_for_young_history(self, ten_day_ledger, at):
        assert ten_day_ledger.prune(at(10), 60) == 0
        assert len(ten_day_ledger) == 10
