"""Tests for the application store."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from moneyfornothing.domain.commands import AddBill, ToggleBillPaid
from moneyfornothing.domain.entities import Bill, Income
from moneyfornothing.domain.errors import NotFoundError, StorageError
from moneyfornothing.domain.store import AppStore


def test_state_requires_load(temp_db):
    with pytest.raises(RuntimeError):
        AppStore(temp_db).state


def test_first_run_initializes_and_persists(temp_db, clock):
    assert temp_db.load_all() is None

    data = AppStore(temp_db, clock=clock).load()

    assert data.app_state.last_session_month == "2025-12"
    assert data.app_state.savings_history == ()
    assert temp_db.load_all() == data


def test_load_existing_data(sample_store, sample_data):
    assert sample_store.state == sample_data


def test_load_repairs_missing_session_month(temp_db, clock, sample_data):
    broken = replace(sample_data, app_state=replace(sample_data.app_state, last_session_month=""))
    temp_db.save_all(broken)

    data = AppStore(temp_db, clock=clock).load()

    assert data.app_state.last_session_month == "2025-12"
    assert data.app_state.savings_history == sample_data.app_state.savings_history
    assert temp_db.get_app_state().last_session_month == "2025-12"


def test_load_restores_missing_paychecks(temp_db, clock, sample_data):
    other = Income("x", "Side Gig", Decimal("10"), Decimal("10"))
    temp_db.save_all(replace(sample_data, income=(other,)))

    data = AppStore(temp_db, clock=clock).load()

    assert sorted(inc.paycheck_number or 0 for inc in data.income) == [0, 1, 2]


def test_read_failure_is_first_run_without_overwrite(tmp_path, clock):
    from moneyfornothing.database.json_file import JSONFileDatabase

    path = tmp_path / "data.json"
    path.write_text("{not json", encoding="utf-8")

    data = AppStore(JSONFileDatabase(str(path)), clock=clock).load()

    assert [inc.name for inc in data.income] == ["Paycheck 1", "Paycheck 2"]
    assert path.read_text(encoding="utf-8") == "{not json"


def test_dispatch_persists_section(store, temp_db):
    bill = Bill("b1", "Rent", Decimal("1200.00"))
    store.dispatch(AddBill(bill))

    assert store.state.bills == (bill,)
    assert temp_db.get_bills() == [bill]


def test_dispatch_unknown_record_leaves_state(store):
    before = store.state
    with pytest.raises(NotFoundError):
        store.dispatch(ToggleBillPaid("missing"))
    assert store.state is before


class FailingSaves:
    """Wraps a database so that every write fails."""

    def __init__(self, db):
        self.db = db

    def __getattr__(self, name):
        if name.startswith("save") or name == "clear_all":
            def fail(*args, **kwargs):
                raise StorageError("disk full")
            return fail
        return getattr(self.db, name)


def test_failed_save_keeps_previous_state(store):
    before = store.state
    store.db = FailingSaves(store.db)

    with pytest.raises(StorageError):
        store.dispatch(AddBill(Bill("b1", "Rent", Decimal("1"))))
    assert store.state is before


def test_replace_all(store, temp_db, sample_data):
    store.replace_all(sample_data)

    assert store.state == sample_data
    assert temp_db.load_all() == sample_data


def test_reset(sample_store, temp_db):
    data = sample_store.reset()

    assert data.bills == ()
    assert data.savings == ()
    assert data.app_state.savings_history == ()
    assert [inc.current_amount for inc in data.income] == [0, 0]
    assert temp_db.load_all() == data


def test_current_month_uses_clock(temp_db):
    store = AppStore(temp_db, clock=lambda: date(2030, 2, 3))
    assert store.current_month() == "2030-02"


def test_initial_data_month_from_clock(temp_db):
    data = AppStore(temp_db, clock=lambda: date(2024, 1, 31)).load()
    assert data.app_state.last_session_month == "2024-01"
