"""CSV import domain service."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

import structlog

from moneyfornothing.domain.csv_codec import parse_csv
from moneyfornothing.domain.entities import AppData
from moneyfornothing.domain.errors import StorageError
from moneyfornothing.domain.store import AppStore

logger = structlog.get_logger(__name__)


class ImportOutcome(Enum):
    SUCCESS = "success"
    PARSE_FAILURE = "parse_failure"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ImportResult:
    """Result of an import attempt.

    ``data`` is the new aggregate on success; ``error`` describes a parse
    failure.
    """

    outcome: ImportOutcome
    data: Optional[AppData] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is ImportOutcome.SUCCESS


class CSVImportService:
    """Service for replacing all data from an exported CSV file."""

    def __init__(self, store: AppStore):
        """Initialize CSV import service.

        Args:
            store: Loaded application store
        """
        self.store = store

    def import_text(self, text: str) -> ImportResult:
        """Parse export text and replace the aggregate with it.

        On failure the current data is left untouched.

        Raises:
            StorageError: If the parsed data cannot be saved
        """
        result = parse_csv(text, today=self.store.clock())
        if not result.success:
            logger.warning("import_failed", error=result.error)
            return ImportResult(ImportOutcome.PARSE_FAILURE, error=result.error)

        self.store.replace_all(result.data)
        logger.info(
            "import_completed",
            income=len(result.data.income),
            bills=len(result.data.bills),
            savings=len(result.data.savings),
        )
        return ImportResult(ImportOutcome.SUCCESS, data=result.data)

    def import_file(
        self,
        path: Optional[Union[str, Path]],
        confirm: Optional[Callable[[], bool]] = None,
    ) -> ImportResult:
        """Import an export file, replacing ALL current data.

        Args:
            path: File to read; None means no file was chosen
            confirm: Asked before anything is read; returning False cancels

        Returns:
            ImportResult with outcome SUCCESS, PARSE_FAILURE or CANCELLED

        Raises:
            StorageError: If the file cannot be read or the new data saved
        """
        if path is None:
            return ImportResult(ImportOutcome.CANCELLED)
        if confirm is not None and not confirm():
            return ImportResult(ImportOutcome.CANCELLED)

        try:
            raw = Path(path).read_bytes()
        except OSError as e:
            raise StorageError(f"Could not read {path}: {e}") from e

        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError:
            error = "File is not valid UTF-8 text"
            logger.warning("import_failed", error=error, path=str(path))
            return ImportResult(ImportOutcome.PARSE_FAILURE, error=error)

        return self.import_text(text)
