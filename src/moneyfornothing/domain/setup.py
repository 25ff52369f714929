"""Onboarding state service."""

from moneyfornothing.domain.commands import SetSetupCompleted
from moneyfornothing.domain.store import AppStore


class SetupService:
    """Service for the first-run setup flag."""

    def __init__(self, store: AppStore):
        self.store = store

    def is_setup_complete(self) -> bool:
        return self.store.state.app_state.has_completed_setup

    def complete_setup(self) -> None:
        """Mark onboarding as finished."""
        self.store.dispatch(SetSetupCompleted(True))

    def restart_setup(self) -> None:
        """Clear the onboarding flag without touching any records."""
        self.store.dispatch(SetSetupCompleted(False))
