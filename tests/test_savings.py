"""Tests for savings service."""

from decimal import Decimal

import pytest

from moneyfornothing.domain.errors import ConflictError, NotFoundError, ValidationError


def test_add_savings_allows_zero(savings_service):
    sav = savings_service.add_savings("Vacation", "0")

    assert sav.amount == Decimal("0.00")
    assert savings_service.list_savings() == [sav]


def test_add_savings_rejects_negative(savings_service):
    with pytest.raises(ValidationError):
        savings_service.add_savings("Vacation", "-1")


def test_add_savings_duplicate(savings_service):
    savings_service.add_savings("Vacation", "10")
    with pytest.raises(ConflictError):
        savings_service.add_savings("vacation", "10")


def test_update_savings(savings_service):
    sav = savings_service.add_savings("Vacation", "10")

    updated = savings_service.update_savings(sav.id, amount="0")
    assert updated.amount == Decimal("0.00")

    updated = savings_service.update_savings(sav.id, name="Trip", amount="25.75")
    assert (updated.name, updated.amount) == ("Trip", Decimal("25.75"))


def test_update_unknown_savings(savings_service):
    with pytest.raises(NotFoundError):
        savings_service.update_savings("missing", amount="1")


def test_delete_and_total(savings_service):
    a = savings_service.add_savings("Emergency", "4000")
    savings_service.add_savings("Vacation", "1000")
    assert savings_service.total() == Decimal("5000.00")

    savings_service.delete_savings(a.id)
    assert savings_service.total() == Decimal("1000.00")


def test_history_starts_empty(savings_service):
    assert savings_service.history() == []
