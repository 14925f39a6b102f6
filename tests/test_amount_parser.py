"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from ledgerkit.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("$123.45", Decimal("123.45")),
        ("€10", Decimal("10")),
        ("£ 7.50", Decimal("7.50")),
        ("1,234.56", Decimal("1234.56")),
        ("10.005", Decimal("10.005")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "inf"])
def test_parse_amount_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_amount(text)
