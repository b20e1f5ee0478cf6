"""Chart of accounts command."""

import click
from ledgerbook.domain.chart_of_accounts import DEFAULT_CHART
from ledgerbook.domain.entities import AccountType


@click.command("accounts")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    help="Only show accounts of this type",
)
def list_accounts(account_type: str | None):
    """List the chart of accounts.

    Examples:
        ledgerbook accounts
        ledgerbook accounts --type Expense
    """
    accounts = list(DEFAULT_CHART)
    if account_type:
        wanted = account_type.lower()
        accounts = [acc for acc in accounts if acc.type.value.lower() == wanted]

    click.echo("\nChart of Accounts:")
    click.echo("-" * 78)
    for acc in accounts:
        lines = []
        if acc.tax_line_t2125:
            lines.append(f"T2125 {acc.tax_line_t2125}")
        if acc.tax_line_t776:
            lines.append(f"T776 {acc.tax_line_t776}")
        click.echo(
            f"{acc.code} | {acc.name:40s} | {acc.type.value:9s} | {', '.join(lines)}"
        )


def register_commands(cli):
    """Register accounts command with main CLI."""
    cli.add_command(list_accounts)
