"""Tests for income service."""

from decimal import Decimal

import pytest

from moneyfornothing.domain.errors import (
    ConflictError,
    NotFoundError,
    ProtectedRecordError,
    ValidationError,
)
from moneyfornothing.domain.store import AppStore


def _paycheck(service, number):
    return next(inc for inc in service.list_income() if inc.paycheck_number == number)


def test_first_run_has_two_paychecks(income_service):
    income = income_service.list_income()
    assert [inc.name for inc in income] == ["Paycheck 1", "Paycheck 2"]
    assert income_service.total() == Decimal("0")


def test_add_income(income_service):
    inc = income_service.add_income("Side Gig", "400")

    assert inc.name == "Side Gig"
    assert inc.default_amount == Decimal("400.00")
    assert inc.current_amount == Decimal("400.00")
    assert inc.paycheck_number is None
    assert income_service.get_income(inc.id) == inc


def test_add_income_is_persisted(income_service, temp_db, clock):
    inc = income_service.add_income("Side Gig", "400")

    reloaded = AppStore(temp_db, clock=clock)
    reloaded.load()
    assert inc in reloaded.state.income


def test_add_income_duplicate_name(income_service):
    income_service.add_income("Side Gig", "400")
    with pytest.raises(ConflictError):
        income_service.add_income("side gig", "100")


def test_add_income_requires_positive_amount(income_service):
    with pytest.raises(ValidationError):
        income_service.add_income("Side Gig", "0")
    assert len(income_service.list_income()) == 2


def test_update_amounts(income_service):
    paycheck = _paycheck(income_service, 1)

    updated = income_service.update_current_amount(paycheck.id, "1800")
    assert updated.current_amount == Decimal("1800.00")

    updated = income_service.update_default_amount(paycheck.id, "2500")
    assert updated.default_amount == Decimal("2500.00")
    assert updated.current_amount == Decimal("1800.00")
    assert income_service.summary().default_total == Decimal("2500.00")


def test_update_amount_validation(income_service):
    paycheck = _paycheck(income_service, 1)
    with pytest.raises(ValidationError) as exc_info:
        income_service.update_current_amount(paycheck.id, "12.345")
    assert exc_info.value.field == "current_amount"


def test_update_unknown_income(income_service):
    with pytest.raises(NotFoundError):
        income_service.update_current_amount("missing", "10")


def test_rename_income(income_service):
    paycheck = _paycheck(income_service, 2)
    renamed = income_service.rename_income(paycheck.id, "  Spouse Pay ")

    assert renamed.name == "Spouse Pay"
    assert renamed.paycheck_number == 2


def test_rename_to_own_name_with_other_case(income_service):
    paycheck = _paycheck(income_service, 1)
    assert income_service.rename_income(paycheck.id, "PAYCHECK 1").name == "PAYCHECK 1"


def test_rename_conflict(income_service):
    paycheck = _paycheck(income_service, 1)
    with pytest.raises(ConflictError):
        income_service.rename_income(paycheck.id, "paycheck 2")


def test_delete_other_income(income_service):
    inc = income_service.add_income("Side Gig", "400")
    income_service.delete_income(inc.id)

    assert income_service.get_income(inc.id) is None


@pytest.mark.parametrize("number", [1, 2])
def test_paychecks_cannot_be_deleted(income_service, number):
    paycheck = _paycheck(income_service, number)
    with pytest.raises(ProtectedRecordError):
        income_service.delete_income(paycheck.id)
    assert len(income_service.list_income()) == 2


def test_reset_to_defaults(income_service):
    inc = income_service.add_income("Side Gig", "400")
    income_service.update_current_amount(inc.id, "100")

    income_service.reset_to_defaults()

    assert all(i.current_amount == i.default_amount for i in income_service.list_income())
    assert income_service.total() == Decimal("400.00")
