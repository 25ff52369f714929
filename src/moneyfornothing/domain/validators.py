"""Validation schemas for user-entered records.

Every validator is pure and returns either ``Valid(value)`` or
``Invalid(error)`` so callers can branch on the result without catching
exceptions. Services unwrap results with ``unwrap`` before mutating state.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, Iterable, Optional, TypeVar, Union

from moneyfornothing.domain.entities import BillInput, IncomeInput, SavingsInput
from moneyfornothing.domain.errors import ValidationError
from moneyfornothing.utils.amount_parser import parse_amount
from moneyfornothing.utils.date_parser import is_month_key

MAX_NAME_LENGTH = 32
NAME_PATTERN = re.compile(r"^[A-Za-z0-9 \-]+$")
MAX_AMOUNT = Decimal("999999999.99")

T = TypeVar("T")


@dataclass(frozen=True)
class Valid(Generic[T]):
    """Successful validation carrying the cleaned value."""

    value: T


@dataclass(frozen=True)
class Invalid:
    """Failed validation carrying the field and reason."""

    error: ValidationError


ValidationResult = Union[Valid[T], Invalid]


def unwrap(result: "ValidationResult[T]") -> T:
    """Return the validated value or raise the carried ValidationError."""
    if isinstance(result, Invalid):
        raise result.error
    return result.value


def _invalid(field: str, reason: str) -> Invalid:
    return Invalid(ValidationError(reason, field=field))


def validate_name(raw: Any, field: str = "name") -> "ValidationResult[str]":
    """Trim a name and check its length and character set."""
    if not isinstance(raw, str):
        return _invalid(field, "Name is required")
    name = raw.strip()
    if not name:
        return _invalid(field, "Name is required")
    if len(name) > MAX_NAME_LENGTH:
        return _invalid(field, f"Name must be {MAX_NAME_LENGTH} characters or less")
    if not NAME_PATTERN.match(name):
        return _invalid(
            field, "Name can only contain letters, numbers, spaces, and hyphens"
        )
    return Valid(name)


def _to_decimal(raw: Any) -> Optional[Decimal]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else None
    if isinstance(raw, int):
        return Decimal(raw)
    if isinstance(raw, float):
        try:
            value = Decimal(str(raw))
        except InvalidOperation:
            return None
        return value if value.is_finite() else None
    if isinstance(raw, str):
        try:
            return parse_amount(raw)
        except ValueError:
            return None
    return None


def validate_amount(
    raw: Any, field: str = "amount", allow_zero: bool = False
) -> "ValidationResult[Decimal]":
    """Check an amount is numeric, has at most two decimals and is in range.

    Args:
        raw: Decimal, int, float or numeric string
        field: Field name reported on failure
        allow_zero: Accept zero (non-negative) instead of strictly positive
    """
    amount = _to_decimal(raw)
    if amount is None:
        return _invalid(field, "Amount must be a number")
    if allow_zero and amount < 0:
        return _invalid(field, "Amount cannot be negative")
    if not allow_zero and amount <= 0:
        return _invalid(field, "Amount must be positive")
    if amount > MAX_AMOUNT:
        return _invalid(field, "Amount is too large")
    if amount != amount.quantize(Decimal("0.01")):
        return _invalid(field, "Amount can have at most 2 decimal places")
    return Valid(amount.quantize(Decimal("0.01")))


def validate_month(raw: Any, field: str = "month") -> "ValidationResult[str]":
    """Check a "YYYY-MM" month key."""
    if not isinstance(raw, str) or not is_month_key(raw.strip()):
        return _invalid(field, "Invalid month format (YYYY-MM)")
    return Valid(raw.strip())


def validate_income_input(name: Any, default_amount: Any) -> "ValidationResult[IncomeInput]":
    """Validate a new income source."""
    name_result = validate_name(name)
    if isinstance(name_result, Invalid):
        return name_result
    amount_result = validate_amount(default_amount, field="default_amount")
    if isinstance(amount_result, Invalid):
        return amount_result
    return Valid(IncomeInput(name=name_result.value, default_amount=amount_result.value))


def validate_bill_input(name: Any, amount: Any) -> "ValidationResult[BillInput]":
    """Validate a new bill."""
    name_result = validate_name(name)
    if isinstance(name_result, Invalid):
        return name_result
    amount_result = validate_amount(amount)
    if isinstance(amount_result, Invalid):
        return amount_result
    return Valid(BillInput(name=name_result.value, amount=amount_result.value))


def validate_savings_input(name: Any, amount: Any) -> "ValidationResult[SavingsInput]":
    """Validate a new savings account; a zero balance is allowed."""
    name_result = validate_name(name)
    if isinstance(name_result, Invalid):
        return name_result
    amount_result = validate_amount(amount, allow_zero=True)
    if isinstance(amount_result, Invalid):
        return amount_result
    return Valid(SavingsInput(name=name_result.value, amount=amount_result.value))


def is_name_unique(name: str, records: Iterable[Any], exclude_id: Optional[str] = None) -> bool:
    """Check a name is unused in a collection (case-insensitive, trimmed)."""
    normalized = name.strip().lower()
    return not any(
        record.name.strip().lower() == normalized and record.id != exclude_id
        for record in records
    )
