"""In-memory owner of the aggregate.

``AppStore`` is created by the composition root and handed to services
explicitly. Every mutation goes through ``dispatch``: the next state is
computed by the pure transition function, persisted, and only then made
visible, so a failed write never leaves the in-memory state half-updated.
"""

from dataclasses import replace
from datetime import date
from typing import Callable, Optional

import structlog

from moneyfornothing.database.base import Database
from moneyfornothing.domain.commands import (
    SECTION_APP_STATE,
    SECTION_BILLS,
    SECTION_INCOME,
    SECTION_SAVINGS,
    Command,
    ReplaceAll,
    apply_command,
)
from moneyfornothing.domain.entities import AppData, create_initial_data, ensure_paychecks
from moneyfornothing.domain.errors import StorageError
from moneyfornothing.domain.rollover import current_month
from moneyfornothing.utils.date_parser import is_month_key

logger = structlog.get_logger(__name__)


class AppStore:
    """Single in-process authority over the loaded AppData."""

    def __init__(self, db: Database, clock: Callable[[], date] = date.today):
        """Initialize the store.

        Args:
            db: Persistence gateway
            clock: Returns today's local date; injectable for tests
        """
        self.db = db
        self.clock = clock
        self._state: Optional[AppData] = None

    @property
    def state(self) -> AppData:
        """The current aggregate.

        Raises:
            RuntimeError: If ``load`` has not been called
        """
        if self._state is None:
            raise RuntimeError("AppStore.load() must be called before reading state")
        return self._state

    def current_month(self) -> str:
        """Wall-clock month as "YYYY-MM"."""
        return current_month(self.clock())

    def load(self) -> AppData:
        """Load the aggregate, initializing it on first run.

        A read failure is logged and treated like a first run, but the fresh
        data is not written over the unreadable store.
        """
        read_failed = False
        try:
            data = self.db.load_all()
        except StorageError as e:
            logger.warning("storage_read_failed", error=str(e))
            data = None
            read_failed = True

        if data is None:
            data = create_initial_data(self.current_month())
            if not read_failed:
                self.db.save_all(data)
                logger.info("first_run_initialized", month=data.app_state.last_session_month)
        else:
            repaired = self._repair(data)
            if repaired != data:
                self.db.save_all(repaired)
                logger.info("stored_data_repaired")
            data = repaired

        self._state = data
        return data

    def _repair(self, data: AppData) -> AppData:
        app_state = data.app_state
        if not is_month_key(app_state.last_session_month or ""):
            app_state = replace(app_state, last_session_month=self.current_month())
        income = data.income
        if sorted(inc.paycheck_number for inc in income if inc.is_paycheck) != [1, 2]:
            income = ensure_paychecks(income)
        return replace(data, income=income, app_state=app_state)

    def _persist(self, section: str, data: AppData) -> None:
        if section == SECTION_INCOME:
            self.db.save_income(list(data.income))
        elif section == SECTION_BILLS:
            self.db.save_bills(list(data.bills))
        elif section == SECTION_SAVINGS:
            self.db.save_savings(list(data.savings))
        elif section == SECTION_APP_STATE:
            self.db.save_app_state(data.app_state)
        else:
            self.db.save_all(data)

    def dispatch(self, command: Command) -> AppData:
        """Apply a command, persist the result and make it current.

        Raises:
            NotFoundError: If the command addresses an unknown record
            StorageError: If the write fails; the in-memory state is unchanged
        """
        current = self.state
        next_state = apply_command(current, command)
        if next_state == current:
            return current

        self._persist(command.section, next_state)
        self._state = next_state
        logger.debug("command_applied", command=type(command).__name__, section=command.section)
        return next_state

    def replace_all(self, data: AppData) -> AppData:
        """Replace the whole aggregate with one atomic write."""
        return self.dispatch(ReplaceAll(data))

    def reset(self) -> AppData:
        """Erase stored data and start over as on first run."""
        self.db.clear_all()
        data = create_initial_data(self.current_month())
        self.db.save_all(data)
        self._state = data
        logger.info("data_reset")
        return data

