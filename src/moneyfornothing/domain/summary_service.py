"""Summary domain service."""

from moneyfornothing.domain.entities import Summary
from moneyfornothing.domain.store import AppStore
from moneyfornothing.domain.summary import build_summary


class SummaryService:
    """Service for the dashboard totals."""

    def __init__(self, store: AppStore):
        """Initialize summary service.

        Args:
            store: Loaded application store
        """
        self.store = store

    def build_summary(self) -> Summary:
        """Compute income, bills and savings totals and remaining cash.

        Returns:
            Summary over the current state; remaining cash may be negative
        """
        return build_summary(self.store.state)
