"""Summary derivation over the current records.

All functions are pure and recompute from scratch; record counts are small
enough that nothing is cached.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from moneyfornothing.domain.entities import (
    AppData,
    Bill,
    BillsSummary,
    Income,
    IncomeSummary,
    Savings,
    SavingsSummary,
    Summary,
)

ZERO = Decimal("0.00")


def _sum(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def income_summary(income: Iterable[Income]) -> IncomeSummary:
    """Total of current amounts, plus the total of default amounts."""
    income = tuple(income)
    return IncomeSummary(
        total=_sum(inc.current_amount for inc in income),
        default_total=_sum(inc.default_amount for inc in income),
    )


def bills_progress(total_paid: Decimal, total_due: Decimal) -> int:
    """Percentage of bills paid, rounded half-up; 0 when nothing is due."""
    if total_due <= 0:
        return 0
    ratio = total_paid / total_due * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def bills_summary(bills: Iterable[Bill]) -> BillsSummary:
    """Due, paid and remaining totals with payment progress."""
    bills = tuple(bills)
    total_due = _sum(bill.amount for bill in bills)
    total_paid = _sum(bill.amount for bill in bills if bill.paid)
    return BillsSummary(
        total_due=total_due,
        total_paid=total_paid,
        total_remaining=total_due - total_paid,
        progress=bills_progress(total_paid, total_due),
    )


def savings_summary(savings: Iterable[Savings]) -> SavingsSummary:
    return SavingsSummary(total=_sum(sav.amount for sav in savings))


def remaining_cash(data: AppData) -> Decimal:
    """Headline figure: income total minus the bills still unpaid.

    Paying a bill moves this back toward the income total.
    """
    return income_summary(data.income).total - bills_summary(data.bills).total_remaining


def build_summary(data: AppData) -> Summary:
    """Compute every derived figure for an aggregate."""
    income = income_summary(data.income)
    bills = bills_summary(data.bills)
    return Summary(
        income=income,
        bills=bills,
        savings=savings_summary(data.savings),
        remaining_cash=income.total - bills.total_remaining,
    )
