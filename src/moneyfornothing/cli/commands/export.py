"""CSV export command."""

import click

from moneyfornothing.cli.error_handling import handle_domain_error
from moneyfornothing.domain.csv_export import CSVExportService
from moneyfornothing.domain.errors import StorageError


@click.command("export")
@click.argument("destination", required=False, type=click.Path())
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the CSV instead of writing a file")
@click.pass_context
def export_csv(ctx, destination: str | None, to_stdout: bool):
    """Export all data to a CSV file.

    DESTINATION may be a file or a directory; by default the file is
    written to the current directory as moneyfornothing-YYYY-MM.csv.
    """
    service = CSVExportService(ctx.obj["store"])

    if to_stdout:
        click.echo(service.generate())
        return

    try:
        path = service.export_to(destination)
        click.echo(f"Exported to {path}")
    except StorageError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_csv)
