"""Tests for CLI output formatting."""

from decimal import Decimal

import pytest

from moneyfornothing.cli.formatting import format_money


@pytest.mark.parametrize(
    "amount, expected",
    [
        (Decimal("0"), "$0.00"),
        (Decimal("12.5"), "$12.50"),
        (Decimal("1234.56"), "$1,234.56"),
        (Decimal("999999999.99"), "$999,999,999.99"),
    ],
)
def test_format_money(amount, expected):
    assert format_money(amount) == expected
