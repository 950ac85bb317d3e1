"""Command-line interface for the commission report.

Reads the sales ledger workbook, builds the monthly commission report and
writes it to a new workbook with one worksheet per month.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .errors import CommissionEngineError
from .output import format_money
from .processor import ReportAssembler
from .spreadsheet import DEFAULT_SHEET, ensure_output_path, read_invoices, write_report


@click.command()
@click.option("--input", "-i", "input_path", required=True, type=click.Path(path_type=Path), help="Source workbook path")
@click.option("--sheet", "-s", "sheet", default=DEFAULT_SHEET, envvar="COMMISSION_SHEET", show_default=True, help="Source worksheet name")
@click.option("--output", "-o", "output_path", required=True, type=click.Path(path_type=Path), help="Where the report workbook is saved")
@click.option("--verbose", "-v", is_flag=True, help="Log skipped rows and pipeline details")
def cli(input_path: Path, sheet: str, output_path: Path, verbose: bool) -> None:
    """Build the monthly sales-commission report."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)

    try:
        invoices = read_invoices(input_path, sheet)
        buckets = ReportAssembler().build(invoices)
        ensure_output_path(output_path)
        write_report(output_path, buckets)
    except CommissionEngineError as exc:
        raise click.ClickException(str(exc))

    for bucket in buckets:
        click.echo(
            f"{bucket.label}: {len(bucket.installments)} installments, "
            f"commission {format_money(bucket.total_commissions)}"
        )
    click.echo(f"Report exported to {output_path}")


if __name__ == "__main__":
    cli()
