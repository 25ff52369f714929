"""Mapper functions between domain entities and storage representations.

SQLAlchemy rows are converted for the SQLite backend; plain dicts are used
by the JSON backend. Amounts are stored as strings in JSON so no precision
is lost.
"""

from decimal import Decimal
from typing import Any

from moneyfornothing.domain import entities as domain
from moneyfornothing.database.models import (
    AppState as ORMAppState,
    Bill as ORMBill,
    Income as ORMIncome,
    Savings as ORMSavings,
    SavingsHistoryEntry as ORMSavingsHistoryEntry,
)


def income_to_domain(orm_income: ORMIncome) -> domain.Income:
    """Convert SQLAlchemy Income model to domain Income entity."""
    return domain.Income(
        id=orm_income.id,
        name=orm_income.name,
        default_amount=Decimal(orm_income.default_amount),
        current_amount=Decimal(orm_income.current_amount),
        paycheck_number=orm_income.paycheck_number,
    )


def income_to_orm(income: domain.Income, position: int) -> ORMIncome:
    return ORMIncome(
        id=income.id,
        position=position,
        name=income.name,
        default_amount=income.default_amount,
        current_amount=income.current_amount,
        paycheck_number=income.paycheck_number,
    )


def bill_to_domain(orm_bill: ORMBill) -> domain.Bill:
    """Convert SQLAlchemy Bill model to domain Bill entity."""
    return domain.Bill(
        id=orm_bill.id,
        name=orm_bill.name,
        amount=Decimal(orm_bill.amount),
        paid=bool(orm_bill.paid),
    )


def bill_to_orm(bill: domain.Bill, position: int) -> ORMBill:
    return ORMBill(
        id=bill.id, position=position, name=bill.name, amount=bill.amount, paid=bill.paid
    )


def savings_to_domain(orm_savings: ORMSavings) -> domain.Savings:
    """Convert SQLAlchemy Savings model to domain Savings entity."""
    return domain.Savings(
        id=orm_savings.id,
        name=orm_savings.name,
        amount=Decimal(orm_savings.amount),
    )


def savings_to_orm(savings: domain.Savings, position: int) -> ORMSavings:
    return ORMSavings(
        id=savings.id, position=position, name=savings.name, amount=savings.amount
    )


def history_entry_to_domain(orm_entry: ORMSavingsHistoryEntry) -> domain.SavingsHistoryEntry:
    return domain.SavingsHistoryEntry(month=orm_entry.month, total=Decimal(orm_entry.total))


def history_entry_to_orm(
    entry: domain.SavingsHistoryEntry, position: int
) -> ORMSavingsHistoryEntry:
    return ORMSavingsHistoryEntry(position=position, month=entry.month, total=entry.total)


def app_state_to_domain(
    orm_state: ORMAppState, history: list[domain.SavingsHistoryEntry]
) -> domain.AppState:
    """Convert the SQLAlchemy AppState row plus history to a domain AppState."""
    return domain.AppState(
        last_session_month=orm_state.last_session_month,
        version_string=orm_state.version_string,
        has_completed_setup=bool(orm_state.has_completed_setup),
        savings_history=tuple(history),
    )


# JSON documents


def income_to_dict(income: domain.Income) -> dict[str, Any]:
    return {
        "id": income.id,
        "name": income.name,
        "defaultAmount": str(income.default_amount),
        "currentAmount": str(income.current_amount),
        "paycheckNumber": income.paycheck_number,
    }


def income_from_dict(raw: dict[str, Any]) -> domain.Income:
    return domain.Income(
        id=raw["id"],
        name=raw["name"],
        default_amount=Decimal(str(raw["defaultAmount"])),
        current_amount=Decimal(str(raw["currentAmount"])),
        paycheck_number=raw.get("paycheckNumber"),
    )


def bill_to_dict(bill: domain.Bill) -> dict[str, Any]:
    return {"id": bill.id, "name": bill.name, "amount": str(bill.amount), "paid": bill.paid}


def bill_from_dict(raw: dict[str, Any]) -> domain.Bill:
    return domain.Bill(
        id=raw["id"],
        name=raw["name"],
        amount=Decimal(str(raw["amount"])),
        paid=bool(raw.get("paid", False)),
    )


def savings_to_dict(savings: domain.Savings) -> dict[str, Any]:
    return {"id": savings.id, "name": savings.name, "amount": str(savings.amount)}


def savings_from_dict(raw: dict[str, Any]) -> domain.Savings:
    return domain.Savings(id=raw["id"], name=raw["name"], amount=Decimal(str(raw["amount"])))


def app_state_to_dict(app_state: domain.AppState) -> dict[str, Any]:
    return {
        "lastSessionMonth": app_state.last_session_month,
        "versionString": app_state.version_string,
        "hasCompletedSetup": app_state.has_completed_setup,
        "savingsHistory": [
            {"month": entry.month, "total": str(entry.total)}
            for entry in app_state.savings_history
        ],
    }


def app_state_from_dict(raw: dict[str, Any]) -> domain.AppState:
    return domain.AppState(
        last_session_month=raw.get("lastSessionMonth", ""),
        version_string=raw.get("versionString", ""),
        has_completed_setup=bool(raw.get("hasCompletedSetup", False)),
        savings_history=tuple(
            domain.SavingsHistoryEntry(month=entry["month"], total=Decimal(str(entry["total"])))
            for entry in raw.get("savingsHistory") or []
        ),
    )
