"""Utility functions for moneyfornothing."""

from moneyfornothing.utils.amount_parser import parse_amount, to_cents
from moneyfornothing.utils.date_parser import format_month, month_key, parse_date, parse_month
from moneyfornothing.utils.record_resolver import resolve_record

__all__ = [
    "parse_amount",
    "to_cents",
    "format_month",
    "month_key",
    "parse_date",
    "parse_month",
    "resolve_record",
]
