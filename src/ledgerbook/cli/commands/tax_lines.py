"""Tax line summary command."""

import click
from datetime import date
from ledgerbook.domain.entities import TaxForm
from ledgerbook.domain.tax_lines import summarize_tax_lines
from ledgerbook.utils.date_parser import month_bounds


@click.command("tax-lines")
@click.option(
    "--form",
    "tax_form",
    type=click.Choice([form.value for form in TaxForm]),
    default=TaxForm.T2125.value,
    show_default=True,
)
@click.option("--year", type=int, help="Tax year (defaults to the current year)")
@click.pass_context
def tax_lines(ctx, tax_form: str, year: int | None):
    """Summarize a year's transactions by T2125 or T776 line."""
    year = year or date.today().year
    start, _ = month_bounds(1, year)
    _, end = month_bounds(12, year)
    transactions = ctx.obj["db"].list_transactions(start_date=start, end_date=end)

    totals = summarize_tax_lines(transactions, TaxForm(tax_form), year)
    if not totals:
        click.echo(f"No {tax_form.upper()} amounts for {year}.")
        return

    click.echo(f"\n{tax_form.upper()} lines for {year}:")
    click.echo("-" * 70)
    for total in totals:
        click.echo(f"{total.line:>5s} | {total.account_name[:40]:40s} | {total.amount:>12,.2f}")


def register_commands(cli):
    """Register tax-lines command with main CLI."""
    cli.add_command(tax_lines)
