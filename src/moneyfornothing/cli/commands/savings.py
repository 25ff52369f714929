"""Savings management commands."""

import click

from moneyfornothing.cli.error_handling import handle_domain_error
from moneyfornothing.cli.formatting import format_money
from moneyfornothing.cli.record_resolution import resolve_record_or_exit
from moneyfornothing.domain.errors import DomainError, StorageError
from moneyfornothing.domain.savings import SavingsService


def _resolve(ctx, service: SavingsService, reference: str) -> str:
    return resolve_record_or_exit(ctx, service.list_savings(), reference, "savings")


@click.group()
def savings_group():
    """Manage savings accounts."""
    pass


@savings_group.command("add")
@click.argument("name")
@click.argument("amount", default="0")
@click.pass_context
def add_savings(ctx, name: str, amount: str):
    """Add a savings account with its current balance."""
    service = SavingsService(ctx.obj["store"])
    try:
        sav = service.add_savings(name, amount)
        click.echo(f"Added savings '{sav.name}' ({format_money(sav.amount)})")
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)


@savings_group.command("list")
@click.pass_context
def list_savings(ctx):
    """List savings accounts."""
    service = SavingsService(ctx.obj["store"])

    records = service.list_savings()
    if not records:
        click.echo("No savings found.")
        return

    click.echo("\nSavings:")
    click.echo("-" * 60)
    for sav in records:
        click.echo(f"{sav.id[:8]} | {sav.name:32s} | {format_money(sav.amount):>14s}")
    click.echo("-" * 60)
    click.echo(f"Total savings: {format_money(service.total())}")


@savings_group.command("update")
@click.argument("savings")
@click.option("--name", help="New account name")
@click.option("--amount", help="New balance")
@click.pass_context
def update_savings(ctx, savings: str, name: str | None, amount: str | None):
    """Change a savings account's name or balance."""
    service = SavingsService(ctx.obj["store"])
    savings_id = _resolve(ctx, service, savings)
    try:
        sav = service.update_savings(savings_id, name=name, amount=amount)
        click.echo(f"Updated savings '{sav.name}' ({format_money(sav.amount)})")
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)


@savings_group.command("delete")
@click.argument("savings")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_savings(ctx, savings: str, yes: bool):
    """Delete a savings account."""
    service = SavingsService(ctx.obj["store"])
    savings_id = _resolve(ctx, service, savings)
    name = service.get_savings(savings_id).name

    if not yes and not click.confirm(f"Delete savings '{name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_savings(savings_id)
        click.echo(f"Deleted savings '{name}'")
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register savings commands with main CLI."""
    cli.add_command(savings_group, name="savings")
