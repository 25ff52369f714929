"""Summary and history commands."""

import click

from moneyfornothing.cli.formatting import format_money
from moneyfornothing.domain.savings import SavingsService
from moneyfornothing.domain.summary_service import SummaryService
from moneyfornothing.utils.date_parser import format_month


@click.command("summary")
@click.pass_context
def summary(ctx):
    """Show this month's totals and remaining cash."""
    store = ctx.obj["store"]
    totals = SummaryService(store).build_summary()

    click.echo(f"\n{format_month(store.state.app_state.last_session_month)}")
    click.echo("=" * 40)
    click.echo(f"Income:          {format_money(totals.income.total):>16s}")
    click.echo(f"Bills due:       {format_money(totals.bills.total_due):>16s}")
    click.echo(f"Bills paid:      {format_money(totals.bills.total_paid):>16s}")
    click.echo(f"Bills remaining: {format_money(totals.bills.total_remaining):>16s}")
    click.echo(f"Savings:         {format_money(totals.savings.total):>16s}")
    click.echo("-" * 40)
    click.echo(f"Remaining cash:  {format_money(totals.remaining_cash):>16s}")
    click.echo(f"Bills progress:  {totals.bills.progress:>15d}%")


@click.command("history")
@click.pass_context
def history(ctx):
    """Show the savings total recorded for past months."""
    entries = SavingsService(ctx.obj["store"]).history()
    if not entries:
        click.echo("No savings history yet. It is recorded when a new month starts.")
        return

    click.echo("\nSavings history:")
    click.echo("-" * 40)
    for entry in entries:
        click.echo(f"{format_month(entry.month):20s} {format_money(entry.total):>16s}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(history)
