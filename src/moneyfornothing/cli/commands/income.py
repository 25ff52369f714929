"""Income management commands."""

import click

from moneyfornothing.cli.error_handling import handle_domain_error
from moneyfornothing.cli.formatting import format_money
from moneyfornothing.cli.record_resolution import resolve_record_or_exit
from moneyfornothing.domain.errors import (
    DomainError,
    ProtectedRecordError,
    StorageError,
    paycheck_delete_blocked,
)
from moneyfornothing.domain.income import IncomeService


def _resolve(ctx, service: IncomeService, reference: str) -> str:
    return resolve_record_or_exit(ctx, service.list_income(), reference, "income")


@click.group()
def income_group():
    """Manage paychecks and other income."""
    pass


@income_group.command("add")
@click.argument("name")
@click.argument("amount")
@click.pass_context
def add_income(ctx, name: str, amount: str):
    """Add an income source expected every month.

    AMOUNT is the default monthly amount; this month's amount starts at it.

    Examples:
        mfn income add "Side Gig" 400
        mfn income add Rental "1,250.00"
    """
    service = IncomeService(ctx.obj["store"])
    try:
        inc = service.add_income(name, amount)
        click.echo(f"Added income '{inc.name}' ({format_money(inc.default_amount)}/month)")
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)


@income_group.command("list")
@click.pass_context
def list_income(ctx):
    """List income sources."""
    service = IncomeService(ctx.obj["store"])

    records = service.list_income()
    click.echo("\nIncome:")
    click.echo("-" * 72)
    for inc in records:
        tag = f"Paycheck {inc.paycheck_number}" if inc.is_paycheck else "Other"
        click.echo(
            f"{inc.id[:8]} | {inc.name:32s} | {tag:10s} | "
            f"{format_money(inc.current_amount):>14s} (default {format_money(inc.default_amount)})"
        )
    totals = service.summary()
    click.echo("-" * 72)
    click.echo(f"Total this month: {format_money(totals.total)}")
    click.echo(f"Default total:    {format_money(totals.default_total)}")


@income_group.command("set-current")
@click.argument("income")
@click.argument("amount")
@click.pass_context
def set_current(ctx, income: str, amount: str):
    """Set the amount received this month.

    INCOME can be a name, an ID or a unique ID prefix.
    """
    service = IncomeService(ctx.obj["store"])
    income_id = _resolve(ctx, service, income)
    try:
        inc = service.update_current_amount(income_id, amount)
        click.echo(f"'{inc.name}' this month: {format_money(inc.current_amount)}")
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)


@income_group.command("set-default")
@click.argument("income")
@click.argument("amount")
@click.pass_context
def set_default(ctx, income: str, amount: str):
    """Set the amount an income resets to each month."""
    service = IncomeService(ctx.obj["store"])
    income_id = _resolve(ctx, service, income)
    try:
        inc = service.update_default_amount(income_id, amount)
        click.echo(f"'{inc.name}' default: {format_money(inc.default_amount)}")
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)


@income_group.command("rename")
@click.argument("income")
@click.argument("new_name")
@click.pass_context
def rename_income(ctx, income: str, new_name: str):
    """Rename an income source."""
    service = IncomeService(ctx.obj["store"])
    income_id = _resolve(ctx, service, income)
    try:
        inc = service.rename_income(income_id, new_name)
        click.echo(f"Renamed income to '{inc.name}'")
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)


@income_group.command("delete")
@click.argument("income")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_income(ctx, income: str, yes: bool):
    """Delete an income source.

    The two main paychecks cannot be deleted; set them to zero instead.
    """
    service = IncomeService(ctx.obj["store"])
    income_id = _resolve(ctx, service, income)
    inc = service.get_income(income_id)

    if inc.is_paycheck:
        handle_domain_error(ctx, ProtectedRecordError(paycheck_delete_blocked(inc.name)))

    if not yes and not click.confirm(f"Delete income '{inc.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_income(income_id)
        click.echo(f"Deleted income '{inc.name}'")
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)


@income_group.command("reset")
@click.pass_context
def reset_income(ctx):
    """Reset this month's amounts to the defaults."""
    service = IncomeService(ctx.obj["store"])
    try:
        service.reset_to_defaults()
        click.echo(f"Income reset to defaults ({format_money(service.total())})")
    except StorageError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register income commands with main CLI."""
    cli.add_command(income_group, name="income")
