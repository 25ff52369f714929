"""Onboarding commands."""

import click

from moneyfornothing.cli.error_handling import handle_domain_error
from moneyfornothing.domain.errors import StorageError
from moneyfornothing.domain.setup import SetupService


@click.group()
def setup_group():
    """Manage the first-run setup flag."""
    pass


@setup_group.command("status")
@click.pass_context
def setup_status(ctx):
    """Show whether setup has been completed."""
    done = SetupService(ctx.obj["store"]).is_setup_complete()
    click.echo("Setup complete." if done else "Setup not completed.")


@setup_group.command("complete")
@click.pass_context
def complete_setup(ctx):
    """Mark setup as completed."""
    try:
        SetupService(ctx.obj["store"]).complete_setup()
        click.echo("Setup marked complete.")
    except StorageError as e:
        handle_domain_error(ctx, e)


@setup_group.command("restart")
@click.pass_context
def restart_setup(ctx):
    """Run setup again; your data is kept."""
    try:
        SetupService(ctx.obj["store"]).restart_setup()
        click.echo("Setup restarted. Your data has been kept.")
    except StorageError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register setup commands with main CLI."""
    cli.add_command(setup_group, name="setup")
