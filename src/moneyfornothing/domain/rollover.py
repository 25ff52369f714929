"""Monthly rollover transition.

When the wall-clock month differs from the stored session month, the
outgoing month's savings total is snapshotted into the capped history,
income is reset to its defaults, every bill is marked unpaid and the
session month advances. Savings balances are never touched.
"""

from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from moneyfornothing.domain.entities import (
    MAX_HISTORY_ENTRIES,
    AppData,
    SavingsHistoryEntry,
)
from moneyfornothing.domain.summary import savings_summary
from moneyfornothing.utils.date_parser import month_key


def current_month(today: Optional[date] = None) -> str:
    """Return the local wall-clock month as "YYYY-MM"."""
    return month_key(today or date.today())


def append_history_entry(
    history: Iterable[SavingsHistoryEntry],
    entry: SavingsHistoryEntry,
    limit: int = MAX_HISTORY_ENTRIES,
) -> tuple[SavingsHistoryEntry, ...]:
    """Append an entry, keeping only the newest ``limit`` entries in order."""
    updated = tuple(history) + (entry,)
    return updated[-limit:]


def needs_rollover(data: AppData, month: str) -> bool:
    """Check whether the session month is behind ``month``.

    A missing session month never triggers a rollover; it is initialized
    instead.
    """
    last_month = data.app_state.last_session_month
    return bool(last_month) and last_month != month


def perform_rollover(data: AppData, month: str) -> AppData:
    """Apply the month-boundary reset, returning a new aggregate.

    Returns ``data`` unchanged when it is already in ``month``.
    """
    state = data.app_state
    if not needs_rollover(data, month):
        return data

    snapshot = SavingsHistoryEntry(
        month=state.last_session_month,
        total=savings_summary(data.savings).total,
    )
    return AppData(
        income=tuple(replace(inc, current_amount=inc.default_amount) for inc in data.income),
        bills=tuple(replace(bill, paid=False) for bill in data.bills),
        savings=data.savings,
        app_state=replace(
            state,
            last_session_month=month,
            savings_history=append_history_entry(state.savings_history, snapshot),
        ),
    )
