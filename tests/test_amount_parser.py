"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from smbtax.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "value,expected",
    [
        ("123.45", Decimal("123.45")),
        ("123,45", Decimal("123.45")),
        ("1 234,56", Decimal("1234.56")),
        ("1 234,56", Decimal("1234.56")),
        ("1.234,56", Decimal("1234.56")),
        ("-123,45", Decimal("-123.45")),
        ("15 000,00 ₽", Decimal("15000.00")),
        ("500 руб.", Decimal("500")),
        ("42", Decimal("42")),
    ],
)
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize("value", ["", "   ", "abc", "12,34,56", "NaN", "Infinity"])
def test_invalid_amount(value):
    with pytest.raises(ValueError):
        parse_amount(value)


def test_rounds_to_cents():
    assert parse_amount("100,005") == Decimal("100.01")
    assert parse_amount("100,004") == Decimal("100.00")
    assert parse_amount("42").as_tuple().exponent == -2
