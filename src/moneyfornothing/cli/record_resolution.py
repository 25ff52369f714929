"""CLI helpers for record resolution."""

from typing import Iterable

import click

from moneyfornothing.utils.record_resolver import NamedRecord, resolve_record


def resolve_record_or_exit(
    ctx: click.Context, records: Iterable[NamedRecord], reference: str, kind: str
) -> str:
    """Resolve a record reference, or exit with a CLI error."""
    try:
        return resolve_record(records, reference, kind=kind)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
