"""Savings domain service."""

from decimal import Decimal
from typing import Optional

import structlog

from moneyfornothing.domain.commands import AddSavings, DeleteSavings, UpdateSavings
from moneyfornothing.domain.entities import Savings, SavingsHistoryEntry, new_record_id
from moneyfornothing.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_name,
    record_not_found,
)
from moneyfornothing.domain.store import AppStore
from moneyfornothing.domain.summary import savings_summary
from moneyfornothing.domain.validators import (
    is_name_unique,
    unwrap,
    validate_amount,
    validate_name,
    validate_savings_input,
)

logger = structlog.get_logger(__name__)


class SavingsService:
    """Service for managing savings accounts.

    Savings balances are only ever changed here; the monthly rollover reads
    them for the history snapshot but leaves them alone.
    """

    def __init__(self, store: AppStore):
        """Initialize savings service.

        Args:
            store: Loaded application store
        """
        self.store = store

    def list_savings(self) -> list[Savings]:
        return list(self.store.state.savings)

    def get_savings(self, savings_id: str) -> Optional[Savings]:
        """Get a savings account by ID, or None if not found."""
        for sav in self.store.state.savings:
            if sav.id == savings_id:
                return sav
        return None

    def require_savings(self, savings_id: str) -> Savings:
        """Get a savings account by ID.

        Raises:
            NotFoundError: If the account does not exist
        """
        savings = self.get_savings(savings_id)
        if savings is None:
            raise NotFoundError(record_not_found("savings", savings_id))
        return savings

    def add_savings(self, name: str, amount) -> Savings:
        """Add a savings account; a zero balance is allowed.

        Raises:
            ValidationError: If name or amount are invalid
            ConflictError: If the name is already used
        """
        data = unwrap(validate_savings_input(name, amount))
        if not is_name_unique(data.name, self.store.state.savings):
            raise ConflictError(duplicate_name("savings", data.name))

        savings = Savings(id=new_record_id(), name=data.name, amount=data.amount)
        self.store.dispatch(AddSavings(savings))
        logger.info("savings_added", savings_id=savings.id)
        return savings

    def update_savings(self, savings_id: str, name: Optional[str] = None, amount=None) -> Savings:
        """Change a savings account's name and/or balance."""
        if name is None and amount is None:
            raise ValidationError("Nothing to update")

        new_name = unwrap(validate_name(name)) if name is not None else None
        new_amount = (
            unwrap(validate_amount(amount, allow_zero=True)) if amount is not None else None
        )
        self.require_savings(savings_id)
        if new_name is not None and not is_name_unique(
            new_name, self.store.state.savings, exclude_id=savings_id
        ):
            raise ConflictError(duplicate_name("savings", new_name))

        self.store.dispatch(UpdateSavings(savings_id, name=new_name, amount=new_amount))
        return self.require_savings(savings_id)

    def delete_savings(self, savings_id: str) -> None:
        self.require_savings(savings_id)
        self.store.dispatch(DeleteSavings(savings_id))
        logger.info("savings_deleted", savings_id=savings_id)

    def total(self) -> Decimal:
        return savings_summary(self.store.state.savings).total

    def history(self) -> list[SavingsHistoryEntry]:
        """Monthly savings totals recorded at each rollover, oldest first."""
        return list(self.store.state.app_state.savings_history)
