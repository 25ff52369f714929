"""Bill domain service."""

from typing import Optional

import structlog

from moneyfornothing.domain.commands import AddBill, DeleteBill, ToggleBillPaid, UpdateBill
from moneyfornothing.domain.entities import Bill, BillsSummary, new_record_id
from moneyfornothing.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_name,
    record_not_found,
)
from moneyfornothing.domain.store import AppStore
from moneyfornothing.domain.summary import bills_summary
from moneyfornothing.domain.validators import (
    is_name_unique,
    unwrap,
    validate_amount,
    validate_bill_input,
    validate_name,
)

logger = structlog.get_logger(__name__)


class BillService:
    """Service for managing monthly bills."""

    def __init__(self, store: AppStore):
        """Initialize bill service.

        Args:
            store: Loaded application store
        """
        self.store = store

    def list_bills(self) -> list[Bill]:
        return list(self.store.state.bills)

    def get_bill(self, bill_id: str) -> Optional[Bill]:
        """Get a bill by ID, or None if not found."""
        for bill in self.store.state.bills:
            if bill.id == bill_id:
                return bill
        return None

    def require_bill(self, bill_id: str) -> Bill:
        """Get a bill by ID.

        Raises:
            NotFoundError: If the bill does not exist
        """
        bill = self.get_bill(bill_id)
        if bill is None:
            raise NotFoundError(record_not_found("bill", bill_id))
        return bill

    def add_bill(self, name: str, amount) -> Bill:
        """Add an unpaid bill.

        Raises:
            ValidationError: If name or amount are invalid
            ConflictError: If the name is already used
        """
        data = unwrap(validate_bill_input(name, amount))
        if not is_name_unique(data.name, self.store.state.bills):
            raise ConflictError(duplicate_name("bill", data.name))

        bill = Bill(id=new_record_id(), name=data.name, amount=data.amount, paid=False)
        self.store.dispatch(AddBill(bill))
        logger.info("bill_added", bill_id=bill.id)
        return bill

    def update_bill(self, bill_id: str, name: Optional[str] = None, amount=None) -> Bill:
        """Change a bill's name and/or amount.

        Raises:
            ValidationError: If nothing is given or a value is invalid
            NotFoundError: If the bill does not exist
            ConflictError: If another bill already uses the name
        """
        if name is None and amount is None:
            raise ValidationError("Nothing to update")

        new_name = unwrap(validate_name(name)) if name is not None else None
        new_amount = unwrap(validate_amount(amount)) if amount is not None else None
        self.require_bill(bill_id)
        if new_name is not None and not is_name_unique(
            new_name, self.store.state.bills, exclude_id=bill_id
        ):
            raise ConflictError(duplicate_name("bill", new_name))

        self.store.dispatch(UpdateBill(bill_id, name=new_name, amount=new_amount))
        return self.require_bill(bill_id)

    def toggle_paid(self, bill_id: str) -> Bill:
        """Flip a bill between paid and unpaid."""
        self.require_bill(bill_id)
        self.store.dispatch(ToggleBillPaid(bill_id))
        return self.require_bill(bill_id)

    def delete_bill(self, bill_id: str) -> None:
        self.require_bill(bill_id)
        self.store.dispatch(DeleteBill(bill_id))
        logger.info("bill_deleted", bill_id=bill_id)

    def summary(self) -> BillsSummary:
        """Due, paid and remaining totals with progress."""
        return bills_summary(self.store.state.bills)
