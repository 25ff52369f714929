"""Income domain service."""

from decimal import Decimal
from typing import Optional

import structlog

from moneyfornothing.domain.commands import (
    AddIncome,
    DeleteIncome,
    RenameIncome,
    ResetIncomeToDefaults,
    UpdateIncomeCurrent,
    UpdateIncomeDefault,
)
from moneyfornothing.domain.entities import Income, IncomeSummary, new_record_id
from moneyfornothing.domain.errors import (
    ConflictError,
    NotFoundError,
    ProtectedRecordError,
    duplicate_name,
    paycheck_delete_blocked,
    record_not_found,
)
from moneyfornothing.domain.store import AppStore
from moneyfornothing.domain.summary import income_summary
from moneyfornothing.domain.validators import (
    is_name_unique,
    unwrap,
    validate_amount,
    validate_income_input,
    validate_name,
)

logger = structlog.get_logger(__name__)


class IncomeService:
    """Service for managing income sources."""

    def __init__(self, store: AppStore):
        """Initialize income service.

        Args:
            store: Loaded application store
        """
        self.store = store

    def list_income(self) -> list[Income]:
        """List income records, paychecks first as stored."""
        return list(self.store.state.income)

    def get_income(self, income_id: str) -> Optional[Income]:
        """Get an income record by ID, or None if not found."""
        for inc in self.store.state.income:
            if inc.id == income_id:
                return inc
        return None

    def require_income(self, income_id: str) -> Income:
        """Get an income record by ID.

        Raises:
            NotFoundError: If the record does not exist
        """
        income = self.get_income(income_id)
        if income is None:
            raise NotFoundError(record_not_found("income", income_id))
        return income

    def add_income(self, name: str, default_amount) -> Income:
        """Add an "other income" source.

        The current amount starts at the default amount.

        Args:
            name: Income name
            default_amount: Expected monthly amount

        Returns:
            The created Income

        Raises:
            ValidationError: If name or amount are invalid
            ConflictError: If the name is already used
        """
        data = unwrap(validate_income_input(name, default_amount))
        if not is_name_unique(data.name, self.store.state.income):
            raise ConflictError(duplicate_name("income", data.name))

        income = Income(
            id=new_record_id(),
            name=data.name,
            default_amount=data.default_amount,
            current_amount=data.default_amount,
        )
        self.store.dispatch(AddIncome(income))
        logger.info("income_added", income_id=income.id)
        return income

    def update_current_amount(self, income_id: str, amount) -> Income:
        """Set the amount received this month."""
        value = unwrap(validate_amount(amount, field="current_amount"))
        self.require_income(income_id)
        self.store.dispatch(UpdateIncomeCurrent(income_id, value))
        return self.require_income(income_id)

    def update_default_amount(self, income_id: str, amount) -> Income:
        """Set the amount the income resets to at each rollover."""
        value = unwrap(validate_amount(amount, field="default_amount"))
        self.require_income(income_id)
        self.store.dispatch(UpdateIncomeDefault(income_id, value))
        return self.require_income(income_id)

    def rename_income(self, income_id: str, name: str) -> Income:
        """Rename an income source.

        Raises:
            ValidationError: If the name is invalid
            NotFoundError: If the record does not exist
            ConflictError: If another income already uses the name
        """
        new_name = unwrap(validate_name(name))
        self.require_income(income_id)
        if not is_name_unique(new_name, self.store.state.income, exclude_id=income_id):
            raise ConflictError(duplicate_name("income", new_name))
        self.store.dispatch(RenameIncome(income_id, new_name))
        return self.require_income(income_id)

    def delete_income(self, income_id: str) -> None:
        """Delete an "other income" source.

        Raises:
            NotFoundError: If the record does not exist
            ProtectedRecordError: If the record is one of the two paychecks
        """
        income = self.require_income(income_id)
        if income.is_paycheck:
            raise ProtectedRecordError(paycheck_delete_blocked(income.name))
        self.store.dispatch(DeleteIncome(income_id))
        logger.info("income_deleted", income_id=income_id)

    def reset_to_defaults(self) -> None:
        """Set every current amount back to its default."""
        self.store.dispatch(ResetIncomeToDefaults())

    def summary(self) -> IncomeSummary:
        return income_summary(self.store.state.income)

    def total(self) -> Decimal:
        return self.summary().total
