"""CSV export domain service."""

from pathlib import Path
from typing import Optional, Union

import structlog

from moneyfornothing.domain.csv_codec import generate_csv
from moneyfornothing.domain.errors import StorageError
from moneyfornothing.domain.store import AppStore

logger = structlog.get_logger(__name__)

EXPORT_FILENAME_PREFIX = "moneyfornothing"


class CSVExportService:
    """Service for exporting the whole aggregate as CSV."""

    def __init__(self, store: AppStore):
        """Initialize CSV export service.

        Args:
            store: Loaded application store
        """
        self.store = store

    def generate(self) -> str:
        """Return the export text for the current state."""
        return generate_csv(self.store.state)

    def export_filename(self) -> str:
        """Default file name for the session month, e.g. ``moneyfornothing-2025-12.csv``."""
        month = self.store.state.app_state.last_session_month
        return f"{EXPORT_FILENAME_PREFIX}-{month}.csv"

    def export_to(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Write the export to a file.

        Args:
            path: Target file or directory; a directory (or None, meaning the
                working directory) receives the default file name

        Returns:
            Path of the written file

        Raises:
            StorageError: If the file cannot be written
        """
        target = Path(path) if path is not None else Path.cwd()
        if target.is_dir():
            target = target / self.export_filename()

        try:
            target.write_text(self.generate(), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not write export to {target}: {e}") from e

        logger.info("export_written", path=str(target))
        return target
