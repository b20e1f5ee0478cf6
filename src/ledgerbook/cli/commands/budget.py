"""Budget commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.budget import ledger_totals
from ledgerbook.domain.budget_service import BudgetService
from ledgerbook.domain.entities import BudgetCategory, LedgerType
from ledgerbook.domain.errors import DomainError
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_month


@click.group("budget")
def budget_group():
    """Manage monthly budgets."""
    pass


@budget_group.command("set")
@click.argument("category")
@click.argument("limit")
@click.option(
    "--ledger",
    type=click.Choice([ledger.value for ledger in LedgerType]),
    default=LedgerType.PERSONAL.value,
    show_default=True,
)
@click.option("--savings-goal", help="Optional savings goal for the category")
@click.pass_context
def set_budget(ctx, category: str, limit: str, ledger: str, savings_goal: str | None):
    """Set the monthly limit for a category, replacing any existing one.

    Examples:
        ledgerbook budget set Meals 200 --ledger active
        ledgerbook budget set Groceries 600
    """
    service = BudgetService(ctx.obj["db"])
    ledger_type = LedgerType(ledger)
    try:
        new_budget = BudgetCategory(
            category=category.strip(),
            ledger_type=ledger_type,
            limit=parse_amount(limit),
            savings_goal=parse_amount(savings_goal) if savings_goal else None,
        )
        key = new_budget.category.casefold()
        budgets = [
            b for b in service.list_budgets(ledger_type) if b.category.strip().casefold() != key
        ]
        budgets.append(new_budget)
        service.save_budgets(ledger_type, budgets)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Budget for '{new_budget.category}' ({ledger}) set to ${new_budget.limit:,.2f}")


@budget_group.command("show")
@click.option("--month", "month_str", help="Month to report (YYYY-MM); defaults to this month")
@click.pass_context
def show_budgets(ctx, month_str: str | None):
    """Show spend against budget for a month."""
    service = BudgetService(ctx.obj["db"])
    try:
        month, year = parse_month(month_str)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    grouped = service.get_usages_by_ledger(month, year)
    click.echo(f"\nBudgets for {year}-{month:02d}:")
    for ledger_type, usages in grouped.items():
        if not usages:
            continue
        click.echo(f"\n{ledger_type.value.title()}")
        click.echo("-" * 70)
        for usage in usages:
            pct = f"{usage.utilization}%" if usage.utilization is not None else "n/a"
            marker = "  OVER" if usage.is_over else ""
            click.echo(
                f"{usage.category[:25]:25s} {usage.spent:>10,.2f} / {usage.limit:>10,.2f}  {pct:>8s}{marker}"
            )
        spent, limit = ledger_totals(usages)
        click.echo(f"{'Total':25s} {spent:>10,.2f} / {limit:>10,.2f}")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group)
