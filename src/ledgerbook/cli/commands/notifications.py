"""Notifications command."""

import click
from datetime import date
from ledgerbook.cli.error_handling import parse_date_or_exit
from ledgerbook.domain.budget_service import BudgetService
from ledgerbook.domain.notifications import DEFAULT_LEASE_WINDOW_DAYS


@click.command("notifications")
@click.option("--today", "today_str", help="Reference date (defaults to today)")
@click.option(
    "--lease-window",
    type=int,
    default=DEFAULT_LEASE_WINDOW_DAYS,
    show_default=True,
    help="Days ahead to warn about lease expiry",
)
@click.pass_context
def show_notifications(ctx, today_str: str | None, lease_window: int):
    """Show pending reviews, budget overages and tax reminders."""
    today = parse_date_or_exit(ctx, today_str) if today_str else date.today()
    notifications = BudgetService(ctx.obj["db"]).get_notifications(
        today, lease_window_days=lease_window
    )
    if not notifications:
        click.echo("No notifications.")
        return

    for notification in notifications:
        click.echo(f"[{notification.type.value}] {notification.date} {notification.message}")


def register_commands(cli):
    """Register notifications command with main CLI."""
    cli.add_command(show_notifications)
