"""Tests for input validation."""

from decimal import Decimal

import pytest

from moneyfornothing.domain.entities import Bill
from moneyfornothing.domain.errors import ValidationError
from moneyfornothing.domain.validators import (
    Invalid,
    Valid,
    is_name_unique,
    unwrap,
    validate_amount,
    validate_bill_input,
    validate_income_input,
    validate_month,
    validate_name,
    validate_savings_input,
)


class TestValidateName:
    """Tests for record names."""

    def test_trims(self):
        assert validate_name("  Rent  ") == Valid("Rent")

    def test_boundaries(self):
        assert isinstance(validate_name("A"), Valid)
        assert isinstance(validate_name("A" * 32), Valid)
        assert isinstance(validate_name("A" * 33), Invalid)
        assert isinstance(validate_name(""), Invalid)
        assert isinstance(validate_name("   "), Invalid)

    def test_allowed_characters(self):
        assert isinstance(validate_name("Car Loan - 2"), Valid)

    @pytest.mark.parametrize("name", ["Rent!", "Café", "A_B", "=SUM(A1)", "a,b"])
    def test_rejected_characters(self, name):
        result = validate_name(name)
        assert isinstance(result, Invalid)
        assert result.error.field == "name"

    def test_non_string(self):
        assert isinstance(validate_name(None), Invalid)


class TestValidateAmount:
    """Tests for amounts."""

    def test_positive_required_by_default(self):
        assert isinstance(validate_amount("0.01"), Valid)
        assert isinstance(validate_amount("0"), Invalid)
        assert isinstance(validate_amount("-1"), Invalid)

    def test_zero_allowed_when_requested(self):
        assert validate_amount("0", allow_zero=True) == Valid(Decimal("0.00"))
        assert isinstance(validate_amount("-0.01", allow_zero=True), Invalid)

    def test_maximum(self):
        assert isinstance(validate_amount("999999999.99"), Valid)
        assert isinstance(validate_amount("1000000000.00"), Invalid)
        assert isinstance(validate_amount("1e40"), Invalid)

    def test_two_decimals(self):
        assert isinstance(validate_amount("12.34"), Valid)
        assert isinstance(validate_amount("12.345"), Invalid)

    def test_accepts_numbers_and_strings(self):
        assert validate_amount(5) == Valid(Decimal("5.00"))
        assert validate_amount(5.5) == Valid(Decimal("5.50"))
        assert validate_amount(Decimal("7.1")) == Valid(Decimal("7.10"))
        assert validate_amount("$1,200") == Valid(Decimal("1200.00"))

    @pytest.mark.parametrize("raw", [True, None, "abc", float("nan"), float("inf"), [1]])
    def test_rejects_non_numeric(self, raw):
        result = validate_amount(raw)
        assert isinstance(result, Invalid)
        assert result.error.reason == "Amount must be a number"

    def test_field_is_reported(self):
        result = validate_amount("x", field="current_amount")
        assert str(result.error).startswith("current_amount:")


def test_validate_month():
    assert validate_month("2025-12") == Valid("2025-12")
    assert isinstance(validate_month("2025-13"), Invalid)
    assert isinstance(validate_month("December"), Invalid)


def test_income_input():
    data = unwrap(validate_income_input(" Side Gig ", "400"))
    assert data.name == "Side Gig"
    assert data.default_amount == Decimal("400.00")
    with pytest.raises(ValidationError):
        unwrap(validate_income_input("Side Gig", "0"))


def test_bill_input():
    assert unwrap(validate_bill_input("Rent", "1200")).amount == Decimal("1200.00")
    with pytest.raises(ValidationError):
        unwrap(validate_bill_input("", "1200"))


def test_savings_input_allows_zero():
    assert unwrap(validate_savings_input("Vacation", "0")).amount == Decimal("0.00")


def test_unwrap_raises_carried_error():
    result = validate_name("")
    with pytest.raises(ValidationError) as exc_info:
        unwrap(result)
    assert exc_info.value is result.error


def test_name_uniqueness_is_case_insensitive():
    bills = [Bill("b1", "Rent", Decimal("1")), Bill("b2", "Phone", Decimal("1"))]

    assert not is_name_unique(" rent ", bills)
    assert is_name_unique("Water", bills)
    assert is_name_unique("RENT", bills, exclude_id="b1")
