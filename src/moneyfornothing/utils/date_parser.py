"""Date and month parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024", ...) and a few
    relative forms: "today", "yesterday", "tomorrow" and
    "last/this/next month|year" (first day of that period).

    Args:
        date_str: Date string in various formats
        today: Reference date for relative forms (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    offsets = {"last": -1, "this": 0, "next": 1}
    words = date_str.split()
    if len(words) == 2 and words[0] in offsets:
        offset = offsets[words[0]]
        if words[1] == "month":
            return (today + relativedelta(months=offset)).replace(day=1)
        if words[1] == "year":
            return today.replace(month=1, day=1) + relativedelta(years=offset)
        raise ValueError(f"Could not parse date '{date_str}'")

    try:
        dt = date_parser.parse(date_str, default=datetime(today.year, 1, 1))
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def month_key(day: date) -> str:
    """Return the "YYYY-MM" key of a date."""
    return f"{day.year:04d}-{day.month:02d}"


def is_month_key(value: str) -> bool:
    """Check that a string is a well-formed "YYYY-MM" key."""
    if not MONTH_PATTERN.match(value):
        return False
    return 1 <= int(value[5:]) <= 12


def parse_month(month_str: str, today: Optional[date] = None) -> str:
    """Parse a month reference ("2024-12", "last month", "Dec 2024") to "YYYY-MM"."""
    month_str = month_str.strip()
    if is_month_key(month_str):
        return month_str
    return month_key(parse_date(month_str, today=today))


def format_month(month: Optional[str] = None) -> str:
    """Format a "YYYY-MM" key for display, e.g. "2025-12" -> "December 2025".

    Falls back to the current month when no usable key is given.
    """
    if not month or not is_month_key(month):
        return date.today().strftime("%B %Y")
    return date(int(month[:4]), int(month[5:]), 1).strftime("%B %Y")
