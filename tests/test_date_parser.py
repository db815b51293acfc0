"""Tests for date parsing."""

from datetime import date, timedelta

import pytest

from smbtax.utils.date_parser import get_date_range, parse_date, parse_statement_date


class TestParseStatementDate:
    def test_valid(self):
        assert parse_statement_date("15.01.2026") == date(2026, 1, 15)
        assert parse_statement_date(" 01.12.2025 ") == date(2025, 12, 1)

    @pytest.mark.parametrize("value", ["2026-01-15", "15.01.26", "31.02.2026", "15/01/2026", ""])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_statement_date(value)


class TestParseDate:
    def test_day_first(self):
        assert parse_date("03.04.2026") == date(2026, 4, 3)

    def test_iso(self):
        assert parse_date("2026-04-03") == date(2026, 4, 3)

    def test_relative(self):
        today = date.today()
        assert parse_date("today") == today
        assert parse_date("Yesterday") == today - timedelta(days=1)
        assert parse_date("this year") == today.replace(month=1, day=1)

    def test_this_quarter(self):
        start = parse_date("this quarter")
        assert start.day == 1
        assert start.month in (1, 4, 7, 10)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_date("not a date")


class TestGetDateRange:
    today = date(2026, 5, 15)

    def test_this_month(self):
        assert get_date_range("this-month", self.today) == (date(2026, 5, 1), self.today)

    def test_this_quarter(self):
        assert get_date_range("this-quarter", self.today) == (date(2026, 4, 1), self.today)

    def test_last_month(self):
        assert get_date_range("last-month", self.today) == (date(2026, 4, 1), date(2026, 4, 30))

    def test_last_quarter(self):
        assert get_date_range("last-quarter", self.today) == (date(2026, 1, 1), date(2026, 3, 31))

    def test_last_year(self):
        assert get_date_range("last-year", self.today) == (date(2025, 1, 1), date(2025, 12, 31))

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_date_range("next-week", self.today)
