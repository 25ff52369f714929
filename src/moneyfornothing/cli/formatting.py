"""Output formatting helpers for CLI commands."""

from decimal import Decimal


def format_money(amount: Decimal) -> str:
    """Format an amount as dollars with thousands separators ("$1,234.56")."""
    return f"${amount:,.2f}"
