"""Domain model entities for moneyfornothing.

These are pure data classes representing the records a user manages, kept
independent of the storage backend so the same shapes flow through the
SQLite store, the JSON store and the CSV codec.
"""

import random
import string
import uuid
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, Optional

MAX_HISTORY_ENTRIES = 12
PAYCHECK_NUMBERS = (1, 2)


def new_record_id() -> str:
    """Return a fresh opaque record identifier."""
    return str(uuid.uuid4())


def generate_version_string() -> str:
    """Return a random display-only version string like ``v0.01682.c``."""
    number = random.randint(0, 99998)
    letter = random.choice(string.ascii_lowercase)
    return f"v0.{number:05d}.{letter}"


@dataclass(frozen=True)
class Income:
    """Income source domain entity.

    The two records tagged with ``paycheck_number`` 1 and 2 are the
    protected paychecks; untagged records are "other income".
    """

    id: str
    name: str
    default_amount: Decimal
    current_amount: Decimal
    paycheck_number: Optional[int] = None

    @property
    def is_paycheck(self) -> bool:
        return self.paycheck_number in PAYCHECK_NUMBERS


@dataclass(frozen=True)
class Bill:
    """Bill domain entity."""

    id: str
    name: str
    amount: Decimal
    paid: bool = False


@dataclass(frozen=True)
class Savings:
    """Savings account domain entity."""

    id: str
    name: str
    amount: Decimal


@dataclass(frozen=True)
class SavingsHistoryEntry:
    """Savings total snapshot for one month ("YYYY-MM")."""

    month: str
    total: Decimal


@dataclass(frozen=True)
class AppState:
    """Per-installation application state."""

    last_session_month: str
    version_string: str
    has_completed_setup: bool = False
    savings_history: tuple[SavingsHistoryEntry, ...] = ()


@dataclass(frozen=True)
class AppData:
    """Aggregate root: the unit of load and save."""

    income: tuple[Income, ...]
    bills: tuple[Bill, ...]
    savings: tuple[Savings, ...]
    app_state: AppState


def create_paycheck(paycheck_number: int) -> Income:
    """Create a zero-amount protected paycheck record."""
    return Income(
        id=new_record_id(),
        name=f"Paycheck {paycheck_number}",
        default_amount=Decimal("0.00"),
        current_amount=Decimal("0.00"),
        paycheck_number=paycheck_number,
    )


def ensure_paychecks(income: Iterable[Income]) -> tuple[Income, ...]:
    """Keep exactly one record per paycheck tag.

    Later duplicates of a tag become other income; missing paychecks are
    restored at zero, ahead of the other records.
    """
    seen: set[int] = set()
    normalized = []
    for inc in income:
        if inc.paycheck_number is not None:
            if inc.paycheck_number in seen or inc.paycheck_number not in PAYCHECK_NUMBERS:
                inc = replace(inc, paycheck_number=None)
            else:
                seen.add(inc.paycheck_number)
        normalized.append(inc)
    restored = [create_paycheck(number) for number in PAYCHECK_NUMBERS if number not in seen]
    return tuple(restored + normalized)


def create_initial_data(month: str) -> AppData:
    """Create the first-run aggregate for the given session month."""
    return AppData(
        income=tuple(create_paycheck(number) for number in PAYCHECK_NUMBERS),
        bills=(),
        savings=(),
        app_state=AppState(
            last_session_month=month,
            version_string=generate_version_string(),
            has_completed_setup=False,
            savings_history=(),
        ),
    )


# Input types (validated user input, no identity yet)


@dataclass(frozen=True)
class IncomeInput:
    name: str
    default_amount: Decimal


@dataclass(frozen=True)
class BillInput:
    name: str
    amount: Decimal


@dataclass(frozen=True)
class SavingsInput:
    name: str
    amount: Decimal


# Derived summaries


@dataclass(frozen=True)
class IncomeSummary:
    """Income totals; ``default_total`` is the sum of default amounts."""

    total: Decimal
    default_total: Decimal


@dataclass(frozen=True)
class BillsSummary:
    """Bill totals with payment progress as a 0-100 percentage."""

    total_due: Decimal
    total_paid: Decimal
    total_remaining: Decimal
    progress: int


@dataclass(frozen=True)
class SavingsSummary:
    total: Decimal


@dataclass(frozen=True)
class Summary:
    """All derived figures for one aggregate, including the headline."""

    income: IncomeSummary
    bills: BillsSummary
    savings: SavingsSummary
    remaining_cash: Decimal
