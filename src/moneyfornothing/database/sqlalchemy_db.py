"""Generic SQLAlchemy database implementation."""

from typing import Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moneyfornothing.database.base import Database
from moneyfornothing.database.mappers import (
    app_state_to_domain,
    bill_to_domain,
    bill_to_orm,
    history_entry_to_domain,
    history_entry_to_orm,
    income_to_domain,
    income_to_orm,
    savings_to_domain,
    savings_to_orm,
)
from moneyfornothing.database.models import (
    APP_STATE_ROW_ID,
    AppState,
    Bill,
    Income,
    Savings,
    SavingsHistoryEntry,
    create_session_factory,
)
from moneyfornothing.domain.entities import (
    AppData,
    AppState as DomainAppState,
    Bill as DomainBill,
    Income as DomainIncome,
    Savings as DomainSavings,
)
from moneyfornothing.domain.errors import StorageError

logger = structlog.get_logger(__name__)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        try:
            self.session_factory = create_session_factory(database_url)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not open database {database_url}: {e}") from e
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def _commit(self, operation: str) -> None:
        session = self._get_session()
        try:
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("storage_write_failed", operation=operation, error=str(e))
            raise StorageError(f"Failed to save {operation}: {e}") from e

    # Whole aggregate
    def load_all(self) -> Optional[AppData]:
        """Load the aggregate. Returns None on first run."""
        app_state = self.get_app_state()
        if app_state is None:
            return None
        return AppData(
            income=tuple(self.get_income()),
            bills=tuple(self.get_bills()),
            savings=tuple(self.get_savings()),
            app_state=app_state,
        )

    def save_all(self, data: AppData) -> None:
        """Replace every table's contents in one transaction."""
        try:
            self._replace_income(data.income)
            self._replace_bills(data.bills)
            self._replace_savings(data.savings)
            self._replace_app_state(data.app_state)
        except SQLAlchemyError as e:
            self._get_session().rollback()
            raise StorageError(f"Failed to save data: {e}") from e
        self._commit("data")
        logger.debug("data_saved", backend="sqlite")

    def clear_all(self) -> None:
        """Delete every stored row."""
        session = self._get_session()
        try:
            for model in (Income, Bill, Savings, SavingsHistoryEntry, AppState):
                session.query(model).delete(synchronize_session="fetch")
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Failed to clear data: {e}") from e
        self._commit("clear")

    # Income operations
    def get_income(self) -> list[DomainIncome]:
        """Get income records in stored order."""
        session = self._get_session()
        try:
            rows = session.query(Income).order_by(Income.position).all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read income: {e}") from e
        return [income_to_domain(row) for row in rows]

    def _replace_income(self, income) -> None:
        session = self._get_session()
        session.query(Income).delete(synchronize_session="fetch")
        session.add_all(income_to_orm(inc, position) for position, inc in enumerate(income))

    def save_income(self, income: list[DomainIncome]) -> None:
        """Replace all income records."""
        try:
            self._replace_income(income)
        except SQLAlchemyError as e:
            self._get_session().rollback()
            raise StorageError(f"Failed to save income: {e}") from e
        self._commit("income")

    # Bill operations
    def get_bills(self) -> list[DomainBill]:
        """Get bills in stored order."""
        session = self._get_session()
        try:
            rows = session.query(Bill).order_by(Bill.position).all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read bills: {e}") from e
        return [bill_to_domain(row) for row in rows]

    def _replace_bills(self, bills) -> None:
        session = self._get_session()
        session.query(Bill).delete(synchronize_session="fetch")
        session.add_all(bill_to_orm(bill, position) for position, bill in enumerate(bills))

    def save_bills(self, bills: list[DomainBill]) -> None:
        """Replace all bills."""
        try:
            self._replace_bills(bills)
        except SQLAlchemyError as e:
            self._get_session().rollback()
            raise StorageError(f"Failed to save bills: {e}") from e
        self._commit("bills")

    # Savings operations
    def get_savings(self) -> list[DomainSavings]:
        """Get savings accounts in stored order."""
        session = self._get_session()
        try:
            rows = session.query(Savings).order_by(Savings.position).all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read savings: {e}") from e
        return [savings_to_domain(row) for row in rows]

    def _replace_savings(self, savings) -> None:
        session = self._get_session()
        session.query(Savings).delete(synchronize_session="fetch")
        session.add_all(savings_to_orm(sav, position) for position, sav in enumerate(savings))

    def save_savings(self, savings: list[DomainSavings]) -> None:
        """Replace all savings accounts."""
        try:
            self._replace_savings(savings)
        except SQLAlchemyError as e:
            self._get_session().rollback()
            raise StorageError(f"Failed to save savings: {e}") from e
        self._commit("savings")

    # App state operations
    def get_app_state(self) -> Optional[DomainAppState]:
        """Get the app state row with its savings history."""
        session = self._get_session()
        try:
            row = session.query(AppState).filter(AppState.id == APP_STATE_ROW_ID).first()
            if row is None:
                return None
            history_rows = (
                session.query(SavingsHistoryEntry).order_by(SavingsHistoryEntry.position).all()
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read app state: {e}") from e
        return app_state_to_domain(row, [history_entry_to_domain(h) for h in history_rows])

    def _replace_app_state(self, app_state: DomainAppState) -> None:
        session = self._get_session()
        row = session.query(AppState).filter(AppState.id == APP_STATE_ROW_ID).first()
        if row is None:
            row = AppState(id=APP_STATE_ROW_ID)
            session.add(row)
        row.last_session_month = app_state.last_session_month
        row.version_string = app_state.version_string
        row.has_completed_setup = app_state.has_completed_setup

        session.query(SavingsHistoryEntry).delete(synchronize_session="fetch")
        session.add_all(
            history_entry_to_orm(entry, position)
            for position, entry in enumerate(app_state.savings_history)
        )

    def save_app_state(self, app_state: DomainAppState) -> None:
        """Replace the app state and savings history."""
        try:
            self._replace_app_state(app_state)
        except SQLAlchemyError as e:
            self._get_session().rollback()
            raise StorageError(f"Failed to save app state: {e}") from e
        self._commit("app state")
