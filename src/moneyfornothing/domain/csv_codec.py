"""CSV export format: generation and tolerant parsing.

The export is a human-readable, sectioned text file:

    Money For Nothing Export - December 2025

    === INCOME ===
    Name,Default Amount,Current Amount,Paycheck Number
    Paycheck 1,2500.00,1800.00,1
    ...

Parsing accepts hand-edited variants of that file: ``---`` delimiters,
missing sections, missing header rows, and stray malformed rows, which are
skipped instead of failing the whole import.
"""

import csv
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from moneyfornothing.domain.entities import (
    MAX_HISTORY_ENTRIES,
    PAYCHECK_NUMBERS,
    AppData,
    AppState,
    Bill,
    Income,
    Savings,
    SavingsHistoryEntry,
    ensure_paychecks,
    generate_version_string,
    new_record_id,
)
from moneyfornothing.domain.errors import ImportParseFailure, no_records_recovered
from moneyfornothing.domain.rollover import current_month
from moneyfornothing.domain.summary import build_summary
from moneyfornothing.domain.validators import MAX_AMOUNT, MAX_NAME_LENGTH
from moneyfornothing.utils.amount_parser import parse_amount, to_cents
from moneyfornothing.utils.date_parser import format_month, is_month_key

EXPORT_TITLE = "Money For Nothing Export"

INCOME = "income"
BILLS = "bills"
SAVINGS = "savings"
SAVINGS_HISTORY = "savings history"
SUMMARY = "summary"
UNKNOWN = "unknown"

# "savings history" must be matched before "savings"
SECTION_KEYWORDS = (SAVINGS_HISTORY, INCOME, BILLS, SAVINGS, SUMMARY)
SECTION_DELIMITERS = ("===", "---")

FORMULA_PREFIXES = ("=", "+", "-", "@")
PAID_VALUES = {"yes", "true", "1", "x"}
ZERO = Decimal("0.00")


# Generation


def escape_csv_value(value: Union[str, int, Decimal, bool]) -> str:
    """Escape one cell, defusing spreadsheet formulas.

    Values starting with ``= + - @`` are quoted with a leading ``'`` marker
    so spreadsheets show them as text; values containing a comma, quote or
    line break are quoted with inner quotes doubled.
    """
    escaped = str(value).replace('"', '""')
    if escaped.startswith(FORMULA_PREFIXES):
        return f"\"'{escaped}\""
    if re.search(r'[,"\n\r]', escaped):
        return f'"{escaped}"'
    return escaped


def _money(amount: Decimal) -> str:
    return f"{amount:.2f}"


def _row(*values) -> str:
    return ",".join(escape_csv_value(value) for value in values)


def generate_csv(data: AppData) -> str:
    """Serialize the whole aggregate to the export format."""
    lines = [f"{EXPORT_TITLE} - {format_month(data.app_state.last_session_month)}", ""]

    lines.append("=== INCOME ===")
    lines.append("Name,Default Amount,Current Amount,Paycheck Number")
    for inc in data.income:
        paycheck = inc.paycheck_number if inc.paycheck_number is not None else ""
        lines.append(
            _row(inc.name, _money(inc.default_amount), _money(inc.current_amount), paycheck)
        )
    lines.append("")

    lines.append("=== BILLS ===")
    lines.append("Name,Amount,Paid")
    for bill in data.bills:
        lines.append(_row(bill.name, _money(bill.amount), "Yes" if bill.paid else "No"))
    lines.append("")

    lines.append("=== SAVINGS ===")
    lines.append("Name,Amount")
    for sav in data.savings:
        lines.append(_row(sav.name, _money(sav.amount)))
    lines.append("")

    history = data.app_state.savings_history
    if history:
        lines.append("=== SAVINGS HISTORY ===")
        lines.append("Month,Total")
        for entry in history:
            lines.append(_row(entry.month, _money(entry.total)))
        lines.append("")

    summary = build_summary(data)
    lines.append("=== SUMMARY ===")
    lines.append(_row("Total Income", _money(summary.income.total)))
    lines.append(_row("Total Bills", _money(summary.bills.total_due)))
    lines.append(_row("Bills Paid", _money(summary.bills.total_paid)))
    lines.append(_row("Bills Remaining", _money(summary.bills.total_remaining)))
    lines.append(_row("Total Savings", _money(summary.savings.total)))
    lines.append(_row("Remaining Cash", _money(summary.remaining_cash)))

    return "\n".join(lines)


# Parsing


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing an export: either data or an error message."""

    success: bool
    data: Optional[AppData] = None
    error: Optional[str] = None


def detect_section(line: str) -> Optional[str]:
    """Return the section a marker line opens, or None for ordinary rows.

    Marker lines contain a delimiter run; one without a known keyword opens
    an ignored section.
    """
    if not any(delimiter in line for delimiter in SECTION_DELIMITERS):
        return None
    lowered = line.lower()
    for keyword in SECTION_KEYWORDS:
        if keyword in lowered:
            return keyword
    return UNKNOWN


def split_row(line: str) -> list[str]:
    """Split one line into trimmed cells, removing formula markers."""
    cells = next(csv.reader([line]), [])
    result = []
    for cell in cells:
        cell = cell.strip()
        if len(cell) > 1 and cell[0] == "'" and cell[1] in "=+-@":
            cell = cell[1:]
        result.append(cell)
    return result


def looks_like_header(cells: list[str], section: str) -> bool:
    """Heuristic for column-header rows."""
    first = cells[0].lower() if cells else ""
    if first.startswith(("name", "month", "total")):
        return True
    if section in (INCOME, BILLS):
        joined = ",".join(cells).lower()
        return ("default" in joined and "amount" in joined) or "paid" in joined
    return False


def _amount_cell(cell: str) -> Optional[Decimal]:
    """Parse an amount leniently, clamped to the valid range; None if unparseable."""
    try:
        amount = parse_amount(cell)
    except ValueError:
        return None
    amount = min(max(amount, ZERO), MAX_AMOUNT)
    return to_cents(amount)


def _name_cell(cell: str) -> str:
    return cell.strip()[:MAX_NAME_LENGTH].strip()


def _paycheck_cell(cell: str) -> Optional[int]:
    try:
        number = int(cell.strip())
    except ValueError:
        return None
    return number if number in PAYCHECK_NUMBERS else None


def _income_row(cells: list[str]) -> Income:
    default_amount = _amount_cell(cells[1]) or ZERO
    current_amount = _amount_cell(cells[2]) if len(cells) > 2 else None
    if current_amount is None:
        current_amount = default_amount
    return Income(
        id=new_record_id(),
        name=_name_cell(cells[0]),
        default_amount=default_amount,
        current_amount=current_amount,
        paycheck_number=_paycheck_cell(cells[3]) if len(cells) > 3 else None,
    )


def _bill_row(cells: list[str]) -> Optional[Bill]:
    amount = _amount_cell(cells[1])
    if amount is None or amount <= ZERO:
        return None
    return Bill(
        id=new_record_id(),
        name=_name_cell(cells[0]),
        amount=amount,
        paid=len(cells) > 2 and cells[2].lower() in PAID_VALUES,
    )


def _savings_row(cells: list[str]) -> Savings:
    return Savings(
        id=new_record_id(),
        name=_name_cell(cells[0]),
        amount=_amount_cell(cells[1]) or ZERO,
    )


def _history_row(cells: list[str]) -> Optional[SavingsHistoryEntry]:
    month = cells[0]
    if not is_month_key(month):
        return None
    total = _amount_cell(cells[1])
    if total is None:
        return None
    return SavingsHistoryEntry(month=month, total=total)


def _first_by_name(records, is_protected=lambda record: False) -> list:
    """Drop records whose name repeats an earlier one, ignoring case.

    Protected records are always kept and claim their names first.
    """
    seen = {record.name.lower() for record in records if is_protected(record)}
    unique = []
    for record in records:
        if not is_protected(record):
            key = record.name.lower()
            if key in seen:
                continue
            seen.add(key)
        unique.append(record)
    return unique


def _parse(text: str, today: Optional[date]) -> AppData:
    income: list[Income] = []
    bills: list[Bill] = []
    savings: list[Savings] = []
    history: list[SavingsHistoryEntry] = []

    section: Optional[str] = None
    headers_skipped: set[str] = set()

    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue

        marker = detect_section(line)
        if marker is not None:
            section = marker
            continue
        if section not in (INCOME, BILLS, SAVINGS, SAVINGS_HISTORY):
            continue

        cells = split_row(line)
        if section not in headers_skipped and looks_like_header(cells, section):
            headers_skipped.add(section)
            continue
        if len(cells) < 2 or not cells[0]:
            continue

        if section == INCOME:
            income.append(_income_row(cells))
        elif section == BILLS:
            bill = _bill_row(cells)
            if bill is not None:
                bills.append(bill)
        elif section == SAVINGS:
            savings.append(_savings_row(cells))
        else:
            entry = _history_row(cells)
            if entry is not None:
                history.append(entry)

    if not income and not bills and not savings:
        raise ImportParseFailure(no_records_recovered())

    if history:
        last_session_month = max(entry.month for entry in history)
    else:
        last_session_month = current_month(today)
    history = sorted(history, key=lambda entry: entry.month)[-MAX_HISTORY_ENTRIES:]

    income = _first_by_name(
        ensure_paychecks(income), is_protected=lambda inc: inc.is_paycheck
    )
    return AppData(
        income=tuple(income),
        bills=tuple(_first_by_name(bills)),
        savings=tuple(_first_by_name(savings)),
        app_state=AppState(
            last_session_month=last_session_month,
            version_string=generate_version_string(),
            has_completed_setup=True,
            savings_history=tuple(history),
        ),
    )


def parse_csv(text: str, today: Optional[date] = None) -> ParseResult:
    """Parse export text into a new aggregate.

    Never raises: unrecognizable input and unexpected errors both produce a
    failed ``ParseResult``.

    Args:
        text: File contents
        today: Reference date for the session month fallback
    """
    try:
        return ParseResult(success=True, data=_parse(text, today))
    except ImportParseFailure as e:
        return ParseResult(success=False, error=str(e))
    except Exception as e:
        return ParseResult(success=False, error=f"Could not parse file: {e}")
