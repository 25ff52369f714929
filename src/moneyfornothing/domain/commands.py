"""State-changing commands and the pure transition function.

Each command is a small frozen dataclass; ``apply_command`` maps
``(AppData, command)`` to the next ``AppData`` without touching storage.
The ``section`` class attribute names the part of the aggregate a command
changes so the store can persist only that part.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import ClassVar, Optional, Union

from moneyfornothing.domain.entities import (
    AppData,
    Bill,
    Income,
    Savings,
    SavingsHistoryEntry,
)
from moneyfornothing.domain.errors import NotFoundError, record_not_found
from moneyfornothing.domain.rollover import append_history_entry, perform_rollover

SECTION_INCOME = "income"
SECTION_BILLS = "bills"
SECTION_SAVINGS = "savings"
SECTION_APP_STATE = "app_state"
SECTION_ALL = "all"


# Income commands


@dataclass(frozen=True)
class AddIncome:
    section: ClassVar[str] = SECTION_INCOME
    income: Income


@dataclass(frozen=True)
class UpdateIncomeCurrent:
    section: ClassVar[str] = SECTION_INCOME
    income_id: str
    current_amount: Decimal


@dataclass(frozen=True)
class UpdateIncomeDefault:
    section: ClassVar[str] = SECTION_INCOME
    income_id: str
    default_amount: Decimal


@dataclass(frozen=True)
class RenameIncome:
    section: ClassVar[str] = SECTION_INCOME
    income_id: str
    name: str


@dataclass(frozen=True)
class DeleteIncome:
    section: ClassVar[str] = SECTION_INCOME
    income_id: str


@dataclass(frozen=True)
class ResetIncomeToDefaults:
    section: ClassVar[str] = SECTION_INCOME


# Bill commands


@dataclass(frozen=True)
class AddBill:
    section: ClassVar[str] = SECTION_BILLS
    bill: Bill


@dataclass(frozen=True)
class UpdateBill:
    section: ClassVar[str] = SECTION_BILLS
    bill_id: str
    name: Optional[str] = None
    amount: Optional[Decimal] = None


@dataclass(frozen=True)
class ToggleBillPaid:
    section: ClassVar[str] = SECTION_BILLS
    bill_id: str


@dataclass(frozen=True)
class DeleteBill:
    section: ClassVar[str] = SECTION_BILLS
    bill_id: str


@dataclass(frozen=True)
class ResetAllBillsUnpaid:
    section: ClassVar[str] = SECTION_BILLS


# Savings commands


@dataclass(frozen=True)
class AddSavings:
    section: ClassVar[str] = SECTION_SAVINGS
    savings: Savings


@dataclass(frozen=True)
class UpdateSavings:
    section: ClassVar[str] = SECTION_SAVINGS
    savings_id: str
    name: Optional[str] = None
    amount: Optional[Decimal] = None


@dataclass(frozen=True)
class DeleteSavings:
    section: ClassVar[str] = SECTION_SAVINGS
    savings_id: str


# App state commands


@dataclass(frozen=True)
class SetSetupCompleted:
    section: ClassVar[str] = SECTION_APP_STATE
    completed: bool


@dataclass(frozen=True)
class SetVersionString:
    section: ClassVar[str] = SECTION_APP_STATE
    version_string: str


@dataclass(frozen=True)
class AddSavingsHistoryEntry:
    section: ClassVar[str] = SECTION_APP_STATE
    entry: SavingsHistoryEntry


# Bulk commands


@dataclass(frozen=True)
class ReplaceAll:
    section: ClassVar[str] = SECTION_ALL
    data: AppData


@dataclass(frozen=True)
class PerformMonthlyRollover:
    section: ClassVar[str] = SECTION_ALL
    month: str


Command = Union[
    AddIncome,
    UpdateIncomeCurrent,
    UpdateIncomeDefault,
    RenameIncome,
    DeleteIncome,
    ResetIncomeToDefaults,
    AddBill,
    UpdateBill,
    ToggleBillPaid,
    DeleteBill,
    ResetAllBillsUnpaid,
    AddSavings,
    UpdateSavings,
    DeleteSavings,
    SetSetupCompleted,
    SetVersionString,
    AddSavingsHistoryEntry,
    ReplaceAll,
    PerformMonthlyRollover,
]


def _update_one(records: tuple, record_id: str, kind: str, **changes) -> tuple:
    if not any(record.id == record_id for record in records):
        raise NotFoundError(record_not_found(kind, record_id))
    return tuple(
        replace(record, **changes) if record.id == record_id else record
        for record in records
    )


def _remove_one(records: tuple, record_id: str, kind: str) -> tuple:
    remaining = tuple(record for record in records if record.id != record_id)
    if len(remaining) == len(records):
        raise NotFoundError(record_not_found(kind, record_id))
    return remaining


def _changes(**fields) -> dict:
    return {key: value for key, value in fields.items() if value is not None}


def apply_command(state: AppData, command: Command) -> AppData:
    """Return the aggregate that results from applying ``command``.

    Raises:
        NotFoundError: If the command addresses an unknown record id
        TypeError: If ``command`` is not a known command
    """
    if isinstance(command, AddIncome):
        return replace(state, income=state.income + (command.income,))
    if isinstance(command, UpdateIncomeCurrent):
        income = _update_one(
            state.income, command.income_id, "income", current_amount=command.current_amount
        )
        return replace(state, income=income)
    if isinstance(command, UpdateIncomeDefault):
        income = _update_one(
            state.income, command.income_id, "income", default_amount=command.default_amount
        )
        return replace(state, income=income)
    if isinstance(command, RenameIncome):
        income = _update_one(state.income, command.income_id, "income", name=command.name)
        return replace(state, income=income)
    if isinstance(command, DeleteIncome):
        return replace(state, income=_remove_one(state.income, command.income_id, "income"))
    if isinstance(command, ResetIncomeToDefaults):
        income = tuple(replace(inc, current_amount=inc.default_amount) for inc in state.income)
        return replace(state, income=income)

    if isinstance(command, AddBill):
        return replace(state, bills=state.bills + (command.bill,))
    if isinstance(command, UpdateBill):
        changes = _changes(name=command.name, amount=command.amount)
        return replace(state, bills=_update_one(state.bills, command.bill_id, "bill", **changes))
    if isinstance(command, ToggleBillPaid):
        bill = next((b for b in state.bills if b.id == command.bill_id), None)
        if bill is None:
            raise NotFoundError(record_not_found("bill", command.bill_id))
        bills = _update_one(state.bills, command.bill_id, "bill", paid=not bill.paid)
        return replace(state, bills=bills)
    if isinstance(command, DeleteBill):
        return replace(state, bills=_remove_one(state.bills, command.bill_id, "bill"))
    if isinstance(command, ResetAllBillsUnpaid):
        return replace(state, bills=tuple(replace(bill, paid=False) for bill in state.bills))

    if isinstance(command, AddSavings):
        return replace(state, savings=state.savings + (command.savings,))
    if isinstance(command, UpdateSavings):
        changes = _changes(name=command.name, amount=command.amount)
        savings = _update_one(state.savings, command.savings_id, "savings", **changes)
        return replace(state, savings=savings)
    if isinstance(command, DeleteSavings):
        return replace(
            state, savings=_remove_one(state.savings, command.savings_id, "savings")
        )

    if isinstance(command, SetSetupCompleted):
        app_state = replace(state.app_state, has_completed_setup=command.completed)
        return replace(state, app_state=app_state)
    if isinstance(command, SetVersionString):
        app_state = replace(state.app_state, version_string=command.version_string)
        return replace(state, app_state=app_state)
    if isinstance(command, AddSavingsHistoryEntry):
        history = append_history_entry(state.app_state.savings_history, command.entry)
        return replace(state, app_state=replace(state.app_state, savings_history=history))

    if isinstance(command, ReplaceAll):
        return command.data
    if isinstance(command, PerformMonthlyRollover):
        return perform_rollover(state, command.month)

    raise TypeError(f"Unknown command: {command!r}")
