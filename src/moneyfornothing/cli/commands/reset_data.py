"""Erase-all-data command."""

import click

from moneyfornothing.cli.error_handling import handle_domain_error
from moneyfornothing.domain.errors import StorageError


@click.command("reset-data")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset_data(ctx, yes: bool):
    """Delete ALL data and start over with two empty paychecks."""
    if not yes and not click.confirm("This permanently deletes ALL your data. Continue?"):
        click.echo("Reset cancelled.")
        return

    try:
        ctx.obj["store"].reset()
        click.echo("All data deleted.")
    except StorageError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register reset-data command with main CLI."""
    cli.add_command(reset_data)
