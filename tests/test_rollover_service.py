"""Tests for rollover service."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

from moneyfornothing.domain.entities import SavingsHistoryEntry
from moneyfornothing.domain.rollover_service import RolloverService
from moneyfornothing.domain.store import AppStore


def test_no_rollover_in_same_month(sample_store):
    service = RolloverService(sample_store)

    assert not service.needs_rollover()
    assert service.check_and_rollover() is False


def test_rollover_on_new_month(sample_store, clock, temp_db):
    service = RolloverService(sample_store)
    clock.today = date(2026, 1, 2)

    assert service.needs_rollover()
    assert service.check_and_rollover() is True

    state = sample_store.state
    assert state.app_state.last_session_month == "2026-01"
    assert state.app_state.savings_history[-1] == SavingsHistoryEntry(
        "2025-12", Decimal("5000.00")
    )
    assert all(inc.current_amount == inc.default_amount for inc in state.income)
    assert not any(bill.paid for bill in state.bills)
    assert temp_db.load_all() == state


def test_second_check_is_noop(sample_store, clock):
    service = RolloverService(sample_store)
    clock.today = date(2026, 1, 2)

    service.check_and_rollover()
    after_first = sample_store.state
    assert service.check_and_rollover() is False
    assert sample_store.state is after_first
    assert len(after_first.app_state.savings_history) == 3


def test_explicit_month(sample_store):
    service = RolloverService(sample_store)

    assert service.needs_rollover("2026-02")
    assert service.perform_rollover("2026-02") is True
    assert sample_store.state.app_state.last_session_month == "2026-02"


def test_restart_after_missed_months(temp_db, sample_data):
    temp_db.save_all(
        replace(sample_data, app_state=replace(sample_data.app_state, last_session_month="2025-06"))
    )
    store = AppStore(temp_db, clock=lambda: date(2025, 12, 1))
    store.load()

    assert RolloverService(store).check_and_rollover()
    assert store.state.app_state.savings_history[-1].month == "2025-06"
