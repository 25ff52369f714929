"""Shared pytest fixtures for moneyfornothing tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from moneyfornothing.database.factories import create_json_database, create_sqlite_database
from moneyfornothing.domain.bills import BillService
from moneyfornothing.domain.entities import (
    AppData,
    AppState,
    Bill,
    Income,
    Savings,
    SavingsHistoryEntry,
)
from moneyfornothing.domain.income import IncomeService
from moneyfornothing.domain.rollover_service import RolloverService
from moneyfornothing.domain.savings import SavingsService
from moneyfornothing.domain.store import AppStore

TODAY = date(2025, 12, 15)


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def temp_json_db(tmp_path):
    """Create a temporary JSON file store for testing."""
    db = create_json_database(file_path=str(tmp_path / "moneyfornothing.json"))
    db.database_path = str(db.file_path)
    db.connect()
    db.initialize_schema()
    yield db
    db.disconnect()


@pytest.fixture(params=["sqlite", "json"])
def any_db(request):
    """Run a test against both storage backends."""
    return request.getfixturevalue("temp_db" if request.param == "sqlite" else "temp_json_db")


class Clock:
    """Settable clock for stores."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def clock():
    return Clock(TODAY)


@pytest.fixture
def store(temp_db, clock):
    """Create a loaded AppStore on a temporary database with a fixed clock."""
    app_store = AppStore(temp_db, clock=clock)
    app_store.load()
    return app_store


@pytest.fixture
def income_service(store):
    return IncomeService(store)


@pytest.fixture
def bill_service(store):
    return BillService(store)


@pytest.fixture
def savings_service(store):
    return SavingsService(store)


@pytest.fixture
def rollover_service(store):
    return RolloverService(store)


@pytest.fixture
def sample_data():
    """Aggregate with every kind of record, in session month 2025-12."""
    return AppData(
        income=(
            Income("inc-1", "Paycheck 1", Decimal("2500.00"), Decimal("1800.00"), 1),
            Income("inc-2", "Paycheck 2", Decimal("2500.00"), Decimal("2500.00"), 2),
            Income("inc-3", "Side Gig", Decimal("400.00"), Decimal("250.50")),
        ),
        bills=(
            Bill("bill-1", "Rent", Decimal("1200.00"), paid=True),
            Bill("bill-2", "Electric", Decimal("150.00"), paid=False),
        ),
        savings=(
            Savings("sav-1", "Emergency Fund", Decimal("4000.00")),
            Savings("sav-2", "Vacation", Decimal("1000.00")),
        ),
        app_state=AppState(
            last_session_month="2025-12",
            version_string="v0.01234.a",
            has_completed_setup=True,
            savings_history=(
                SavingsHistoryEntry("2025-10", Decimal("4500.00")),
                SavingsHistoryEntry("2025-11", Decimal("4800.00")),
            ),
        ),
    )


@pytest.fixture
def sample_store(temp_db, clock, sample_data):
    """Store loaded from a database holding ``sample_data``."""
    temp_db.save_all(sample_data)
    app_store = AppStore(temp_db, clock=clock)
    app_store.load()
    return app_store


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
