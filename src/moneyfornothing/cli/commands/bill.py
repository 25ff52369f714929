"""Bill management commands."""

import click

from moneyfornothing.cli.error_handling import handle_domain_error
from moneyfornothing.cli.formatting import format_money
from moneyfornothing.cli.record_resolution import resolve_record_or_exit
from moneyfornothing.domain.bills import BillService
from moneyfornothing.domain.errors import DomainError, StorageError


def _resolve(ctx, service: BillService, reference: str) -> str:
    return resolve_record_or_exit(ctx, service.list_bills(), reference, "bill")


@click.group()
def bill_group():
    """Manage monthly bills."""
    pass


@bill_group.command("add")
@click.argument("name")
@click.argument("amount")
@click.pass_context
def add_bill(ctx, name: str, amount: str):
    """Add a monthly bill.

    Examples:
        mfn bill add Rent 1200
        mfn bill add "Car Insurance" 89.99
    """
    service = BillService(ctx.obj["store"])
    try:
        bill = service.add_bill(name, amount)
        click.echo(f"Added bill '{bill.name}' ({format_money(bill.amount)})")
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)


@bill_group.command("list")
@click.pass_context
def list_bills(ctx):
    """List bills and payment progress."""
    service = BillService(ctx.obj["store"])

    bills = service.list_bills()
    if not bills:
        click.echo("No bills found.")
        return

    click.echo("\nBills:")
    click.echo("-" * 64)
    for bill in bills:
        mark = "[x]" if bill.paid else "[ ]"
        click.echo(f"{mark} {bill.id[:8]} | {bill.name:32s} | {format_money(bill.amount):>14s}")
    totals = service.summary()
    click.echo("-" * 64)
    click.echo(
        f"Paid {format_money(totals.total_paid)} of {format_money(totals.total_due)} "
        f"({totals.progress}%), {format_money(totals.total_remaining)} remaining"
    )


@bill_group.command("update")
@click.argument("bill")
@click.option("--name", help="New bill name")
@click.option("--amount", help="New bill amount")
@click.pass_context
def update_bill(ctx, bill: str, name: str | None, amount: str | None):
    """Change a bill's name or amount.

    BILL can be a name, an ID or a unique ID prefix.
    """
    service = BillService(ctx.obj["store"])
    bill_id = _resolve(ctx, service, bill)
    try:
        updated = service.update_bill(bill_id, name=name, amount=amount)
        click.echo(f"Updated bill '{updated.name}' ({format_money(updated.amount)})")
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)


@bill_group.command("toggle")
@click.argument("bill")
@click.pass_context
def toggle_bill(ctx, bill: str):
    """Mark a bill paid, or unpaid again."""
    service = BillService(ctx.obj["store"])
    bill_id = _resolve(ctx, service, bill)
    try:
        updated = service.toggle_paid(bill_id)
        state = "paid" if updated.paid else "unpaid"
        click.echo(f"Marked '{updated.name}' as {state}")
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)


@bill_group.command("delete")
@click.argument("bill")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_bill(ctx, bill: str, yes: bool):
    """Delete a bill."""
    service = BillService(ctx.obj["store"])
    bill_id = _resolve(ctx, service, bill)
    name = service.get_bill(bill_id).name

    if not yes and not click.confirm(f"Delete bill '{name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_bill(bill_id)
        click.echo(f"Deleted bill '{name}'")
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register bill commands with main CLI."""
    cli.add_command(bill_group, name="bill")
