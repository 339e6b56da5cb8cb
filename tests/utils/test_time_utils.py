"""Tests for time and price utilities."""

from datetime import date, datetime
from decimal import Decimal

from stock_sim.utils.money import round2, to_decimal
from stock_sim.utils.time import format_timestamp, is_new_day, parse_timestamp, to_date


class TestTimeUtils:
    """Test simulated time helpers."""

    def test_to_date(self):
        assert to_date(datetime(2024, 3, 1, 23, 59)) == date(2024, 3, 1)
        assert to_date(date(2024, 3, 1)) == date(2024, 3, 1)

    def test_is_new_day(self):
        assert is_new_day(datetime(2024, 3, 1, 23, 59), datetime(2024, 3, 2, 0, 0))
        assert is_new_day(datetime(2024, 3, 1, 9), datetime(2024, 3, 5, 9))
        assert not is_new_day(datetime(2024, 3, 1, 0, 0), datetime(2024, 3, 1, 23, 59))
        assert not is_new_day(None, datetime(2024, 3, 1))

    def test_timestamp_round_trip(self):
        ts = datetime(2024, 3, 1, 9, 30, 15)
        assert format_timestamp(ts) == "2024-03-01T09:30:15"
        assert parse_timestamp(format_timestamp(ts)) == ts


class TestMoneyUtils:
    """Test fixed-point price helpers."""

    def test_round2_half_even(self):
        assert round2(Decimal("2.675")) == Decimal("2.68")
        assert round2(Decimal("2.665")) == Decimal("2.66")
        assert round2(3) == Decimal("3.00")

    def test_float_conversion_uses_shortest_repr(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert round2(1.005) == Decimal("1.00")
