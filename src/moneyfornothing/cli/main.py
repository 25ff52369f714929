"""Main CLI entry point."""

import click

from moneyfornothing.database.factories import BACKENDS, create_database
from moneyfornothing.domain.errors import StorageError
from moneyfornothing.domain.rollover_service import RolloverService
from moneyfornothing.domain.store import AppStore
from moneyfornothing.utils.date_parser import format_month, parse_date
from moneyfornothing.utils.logging_config import configure_logging

# Import and register all commands at module level
from moneyfornothing.cli.commands import (
    bill,
    export,
    import_cmd,
    income,
    reset_data,
    rollover,
    savings,
    setup,
    summary,
)

@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to data file (overrides MFN_DB_PATH environment variable)",
    envvar="MFN_DB_PATH",
)
@click.option(
    "--backend",
    type=click.Choice(BACKENDS, case_sensitive=False),
    help="Storage backend (overrides MFN_STORAGE_BACKEND environment variable)",
    envvar="MFN_STORAGE_BACKEND",
)
@click.option(
    "--today",
    help="Pretend today is this date, e.g. 2025-12-01 or 'next month'",
)
@click.option(
    "--no-auto-rollover",
    is_flag=True,
    help="Do not start a new month automatically",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    backend: str | None,
    today: str | None,
    no_auto_rollover: bool,
    verbose: bool,
):
    """Money For Nothing - simple monthly budget tracker.

    Track your paychecks, bills and savings. At the start of every month
    income resets to its defaults, bills are marked unpaid and your savings
    total is recorded in the history.
    """
    ctx.ensure_object(dict)
    configure_logging("DEBUG" if verbose else None)

    # Open storage only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    clock_today = None
    if today is not None:
        try:
            clock_today = parse_date(today)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--today")

    try:
        db = create_database(backend=backend, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)

        if clock_today is not None:
            store = AppStore(db, clock=lambda: clock_today)
        else:
            store = AppStore(db)
        store.load()

        if not no_auto_rollover and RolloverService(store).check_and_rollover():
            click.echo(
                f"New month: started {format_month(store.state.app_state.last_session_month)}. "
                "Income reset to defaults and bills marked unpaid.",
                err=True,
            )
    except (StorageError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    ctx.obj["db"] = db
    ctx.obj["store"] = store


# Register all commands
income.register_commands(cli)
bill.register_commands(cli)
savings.register_commands(cli)
summary.register_commands(cli)
rollover.register_commands(cli)
export.register_commands(cli)
import_cmd.register_commands(cli)
setup.register_commands(cli)
reset_data.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
