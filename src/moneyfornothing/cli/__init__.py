"""Command line interface for moneyfornothing."""
