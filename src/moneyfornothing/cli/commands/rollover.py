"""Monthly rollover command."""

import click

from moneyfornothing.cli.error_handling import handle_domain_error
from moneyfornothing.domain.errors import StorageError
from moneyfornothing.domain.rollover_service import RolloverService
from moneyfornothing.utils.date_parser import format_month


@click.command("rollover")
@click.option("--run", is_flag=True, help="Start the new month if one is due")
@click.pass_context
def rollover(ctx, run: bool):
    """Show or perform the start-of-month reset.

    A new month normally starts automatically; use this together with
    --no-auto-rollover to check first.
    """
    store = ctx.obj["store"]
    service = RolloverService(store)
    session_month = format_month(store.state.app_state.last_session_month)
    current = format_month(store.current_month())

    if not service.needs_rollover():
        click.echo(f"Up to date: session month is {session_month}.")
        return

    if not run:
        click.echo(f"Rollover due: session month {session_month}, current month {current}.")
        click.echo("Run 'mfn rollover --run' to start the new month.")
        return

    try:
        service.check_and_rollover()
        click.echo(f"Started {current}. Income reset to defaults and bills marked unpaid.")
    except StorageError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register rollover command with main CLI."""
    cli.add_command(rollover)
