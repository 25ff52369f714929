"""CSV import command."""

import click

from moneyfornothing.cli.error_handling import handle_domain_error
from moneyfornothing.domain.csv_import import CSVImportService, ImportOutcome
from moneyfornothing.domain.errors import StorageError


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Replace data without asking")
@click.pass_context
def import_csv(ctx, csv_file: str, yes: bool):
    """Replace ALL data with the contents of an exported CSV file."""
    service = CSVImportService(ctx.obj["store"])

    def confirm() -> bool:
        return yes or click.confirm("This will replace ALL your current data. Continue?")

    try:
        result = service.import_file(csv_file, confirm=confirm)
    except StorageError as e:
        handle_domain_error(ctx, e)

    if result.outcome is ImportOutcome.CANCELLED:
        click.echo("Import cancelled.")
        return
    if result.outcome is ImportOutcome.PARSE_FAILURE:
        click.echo(f"Error: Import failed: {result.error}", err=True)
        ctx.exit(1)

    data = result.data
    click.echo("\nImport complete:")
    click.echo(f"  Income:  {len(data.income)}")
    click.echo(f"  Bills:   {len(data.bills)}")
    click.echo(f"  Savings: {len(data.savings)}")
    click.echo(f"  History: {len(data.app_state.savings_history)} months")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
