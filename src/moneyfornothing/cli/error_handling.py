"""CLI error handling helpers."""

from typing import Union

import click

from moneyfornothing.domain.errors import DomainError, StorageError


def handle_domain_error(
    ctx: click.Context, error: Union[DomainError, StorageError, ValueError]
) -> None:
    """Render a domain or storage error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
