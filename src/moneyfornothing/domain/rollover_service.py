"""Monthly rollover domain service."""

from typing import Optional

import structlog

from moneyfornothing.domain.commands import PerformMonthlyRollover
from moneyfornothing.domain.rollover import needs_rollover
from moneyfornothing.domain.store import AppStore

logger = structlog.get_logger(__name__)


class RolloverService:
    """Service that detects month boundaries and applies the reset."""

    def __init__(self, store: AppStore):
        """Initialize rollover service.

        Args:
            store: Loaded application store
        """
        self.store = store

    def needs_rollover(self, month: Optional[str] = None) -> bool:
        """Check whether the stored session month is behind ``month``.

        Args:
            month: Month as "YYYY-MM"; defaults to the store's current month
        """
        return needs_rollover(self.store.state, month or self.store.current_month())

    def perform_rollover(self, month: Optional[str] = None) -> bool:
        """Roll the aggregate over into ``month`` with a single save.

        Returns:
            True if the state changed, False if it was already in ``month``
        """
        target = month or self.store.current_month()
        previous = self.store.state
        if not needs_rollover(previous, target):
            return False

        self.store.dispatch(PerformMonthlyRollover(target))
        logger.info(
            "rollover_performed",
            from_month=previous.app_state.last_session_month,
            to_month=target,
        )
        return True

    def check_and_rollover(self) -> bool:
        """Roll over into the wall-clock month if it has changed.

        Calling it again in the same month does nothing.

        Returns:
            True if a rollover happened
        """
        return self.perform_rollover(self.store.current_month())
