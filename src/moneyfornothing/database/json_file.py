"""JSON key-value file implementation of the Database interface.

All sections live in one JSON document under fixed keys. Every write
replaces the document through a temporary file and ``os.replace`` so a
crash never leaves a half-written file behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

import structlog

from moneyfornothing.database.base import Database
from moneyfornothing.database.mappers import (
    app_state_from_dict,
    app_state_to_dict,
    bill_from_dict,
    bill_to_dict,
    income_from_dict,
    income_to_dict,
    savings_from_dict,
    savings_to_dict,
)
from moneyfornothing.domain.entities import AppData, AppState, Bill, Income, Savings
from moneyfornothing.domain.errors import StorageError

logger = structlog.get_logger(__name__)

STORAGE_KEYS = {
    "income": "moneyfornothing_income",
    "bills": "moneyfornothing_bills",
    "savings": "moneyfornothing_savings",
    "app_state": "moneyfornothing_appstate",
}


class JSONFileDatabase(Database):
    """Key-value store kept in a single JSON file."""

    def __init__(self, file_path: str):
        """Initialize the JSON store.

        Args:
            file_path: Path of the JSON document (created on first write)
        """
        self.file_path = Path(file_path)

    def connect(self) -> None:
        """Connect to the store."""
        # Files are opened per operation
        pass

    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    def initialize_schema(self) -> None:
        """Make sure the parent directory exists."""
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Could not create {self.file_path.parent}: {e}") from e

    def _read(self) -> dict[str, Any]:
        if not self.file_path.exists():
            return {}
        try:
            if self.file_path.stat().st_size == 0:
                return {}
        except OSError as e:
            raise StorageError(f"Could not read {self.file_path}: {e}") from e
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read {self.file_path}: {e}") from e
        if not isinstance(document, dict):
            raise StorageError(f"Unexpected content in {self.file_path}")
        return document

    def _write(self, document: dict[str, Any]) -> None:
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.file_path.parent, prefix=self.file_path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2)
                os.replace(tmp_path, self.file_path)
            finally:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
        except OSError as e:
            logger.error("storage_write_failed", path=str(self.file_path), error=str(e))
            raise StorageError(f"Could not write {self.file_path}: {e}") from e

    def _update(self, key: str, value: Any) -> None:
        document = self._read()
        document[STORAGE_KEYS[key]] = value
        self._write(document)

    # Whole aggregate
    def load_all(self) -> Optional[AppData]:
        """Load the aggregate. Returns None when income or app state are missing."""
        document = self._read()
        if STORAGE_KEYS["income"] not in document or STORAGE_KEYS["app_state"] not in document:
            return None
        try:
            return AppData(
                income=tuple(income_from_dict(r) for r in document[STORAGE_KEYS["income"]]),
                bills=tuple(bill_from_dict(r) for r in document.get(STORAGE_KEYS["bills"], [])),
                savings=tuple(
                    savings_from_dict(r) for r in document.get(STORAGE_KEYS["savings"], [])
                ),
                app_state=app_state_from_dict(document[STORAGE_KEYS["app_state"]]),
            )
        except (KeyError, TypeError, ArithmeticError) as e:
            raise StorageError(f"Corrupt data in {self.file_path}: {e}") from e

    def save_all(self, data: AppData) -> None:
        """Write every section in a single file replacement."""
        self._write(
            {
                STORAGE_KEYS["income"]: [income_to_dict(inc) for inc in data.income],
                STORAGE_KEYS["bills"]: [bill_to_dict(bill) for bill in data.bills],
                STORAGE_KEYS["savings"]: [savings_to_dict(sav) for sav in data.savings],
                STORAGE_KEYS["app_state"]: app_state_to_dict(data.app_state),
            }
        )
        logger.debug("data_saved", backend="json", path=str(self.file_path))

    def clear_all(self) -> None:
        """Delete the JSON document."""
        try:
            self.file_path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Could not delete {self.file_path}: {e}") from e

    def _section(self, key: str, from_dict) -> list:
        try:
            return [from_dict(raw) for raw in self._read().get(STORAGE_KEYS[key], [])]
        except (KeyError, TypeError, ArithmeticError) as e:
            raise StorageError(f"Corrupt {key} in {self.file_path}: {e}") from e

    # Sections
    def get_income(self) -> list[Income]:
        return self._section("income", income_from_dict)

    def save_income(self, income: list[Income]) -> None:
        self._update("income", [income_to_dict(inc) for inc in income])

    def get_bills(self) -> list[Bill]:
        return self._section("bills", bill_from_dict)

    def save_bills(self, bills: list[Bill]) -> None:
        self._update("bills", [bill_to_dict(bill) for bill in bills])

    def get_savings(self) -> list[Savings]:
        return self._section("savings", savings_from_dict)

    def save_savings(self, savings: list[Savings]) -> None:
        self._update("savings", [savings_to_dict(sav) for sav in savings])

    def get_app_state(self) -> Optional[AppState]:
        raw = self._read().get(STORAGE_KEYS["app_state"])
        if raw is None:
            return None
        try:
            return app_state_from_dict(raw)
        except (KeyError, TypeError, ArithmeticError) as e:
            raise StorageError(f"Corrupt app state in {self.file_path}: {e}") from e

    def save_app_state(self, app_state: AppState) -> None:
        self._update("app_state", app_state_to_dict(app_state))
