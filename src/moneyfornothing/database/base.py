"""Abstract persistence gateway."""

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from moneyfornothing.domain.entities import (
    AppData,
    AppState,
    Bill,
    Income,
    Savings,
    SavingsHistoryEntry,
)
from moneyfornothing.domain.errors import StorageError


class Database(ABC):
    """Abstract whole-aggregate store for moneyfornothing.

    ``save_all`` is the atomic write used by rollover and import. The
    per-section ``save_*`` methods are conveniences for single-section edits
    and must leave the other sections untouched.

    Implementations raise ``StorageError`` when the backend fails.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the backend."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release backend resources."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create tables or files if they do not exist."""
        pass

    # Whole aggregate
    @abstractmethod
    def load_all(self) -> Optional[AppData]:
        """Load the aggregate. Returns None on first run (nothing stored)."""
        pass

    @abstractmethod
    def save_all(self, data: AppData) -> None:
        """Replace the whole stored aggregate in a single write."""
        pass

    @abstractmethod
    def clear_all(self) -> None:
        """Remove everything stored."""
        pass

    # Sections
    @abstractmethod
    def get_income(self) -> list[Income]:
        """Get income records in stored order."""
        pass

    @abstractmethod
    def save_income(self, income: list[Income]) -> None:
        """Replace all income records."""
        pass

    @abstractmethod
    def get_bills(self) -> list[Bill]:
        """Get bills in stored order."""
        pass

    @abstractmethod
    def save_bills(self, bills: list[Bill]) -> None:
        """Replace all bills."""
        pass

    @abstractmethod
    def get_savings(self) -> list[Savings]:
        """Get savings accounts in stored order."""
        pass

    @abstractmethod
    def save_savings(self, savings: list[Savings]) -> None:
        """Replace all savings accounts."""
        pass

    @abstractmethod
    def get_app_state(self) -> Optional[AppState]:
        """Get the app state, including savings history, or None if unset."""
        pass

    @abstractmethod
    def save_app_state(self, app_state: AppState) -> None:
        """Replace the app state, including savings history."""
        pass

    def get_savings_history(self) -> list[SavingsHistoryEntry]:
        """Get the savings history log, oldest first."""
        app_state = self.get_app_state()
        if app_state is None:
            return []
        return list(app_state.savings_history)

    def save_savings_history(self, history: list[SavingsHistoryEntry]) -> None:
        """Replace the savings history log.

        Raises:
            StorageError: If no app state has been stored yet
        """
        app_state = self.get_app_state()
        if app_state is None:
            raise StorageError("Cannot save savings history before app state exists")
        self.save_app_state(replace(app_state, savings_history=tuple(history)))
