"""Derive dashboard notifications from current state."""

from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from ledgerbook.domain.entities import (
    BudgetUsage,
    LedgerType,
    Notification,
    NotificationType,
    Property,
    Transaction,
)

# March, June, September, December
QUARTER_END_MONTHS = (3, 6, 9, 12)

DEFAULT_LEASE_WINDOW_DAYS = 60


def _whole_units(value: Decimal) -> Decimal:
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def pending_notifications(transactions: Iterable[Transaction]) -> list[Notification]:
    return [
        Notification(
            id=f"tx-{txn.id}",
            type=NotificationType.PENDING_TX,
            message=f"Review: {txn.vendor} (${abs(txn.amount)})",
            date=txn.date,
            related_id=str(txn.id),
        )
        for txn in transactions
        if txn.is_pending
    ]


def budget_notifications(usages: Iterable[BudgetUsage], today: date) -> list[Notification]:
    notifications = []
    for usage in usages:
        if not usage.is_over:
            continue
        overage = _whole_units(usage.spent - usage.limit)
        notifications.append(
            Notification(
                id=f"budget-{LedgerType(usage.ledger_type).value}-{usage.category}",
                type=NotificationType.BUDGET_OVER,
                message=f"Over Budget: {usage.category} (-${overage})",
                date=today,
                related_id=usage.category,
                amount=overage,
            )
        )
    return notifications


def lease_notifications(
    properties: Iterable[Property], today: date, window_days: int
) -> list[Notification]:
    horizon = today + timedelta(days=window_days)
    return [
        Notification(
            id=f"lease-{prop.id}",
            type=NotificationType.LEASE_EXPIRY,
            message=f"Lease ending {prop.lease_end.isoformat()}: {prop.address} ({prop.tenant_name})",
            date=today,
            related_id=str(prop.id),
        )
        for prop in properties
        if prop.lease_end is not None and today <= prop.lease_end <= horizon
    ]


def derive_notifications(
    transactions: Iterable[Transaction],
    aggregated_budgets: dict | Iterable[BudgetUsage],
    today: date,
    properties: Iterable[Property] = (),
    lease_window_days: int = DEFAULT_LEASE_WINDOW_DAYS,
) -> list[Notification]:
    """Project current state into a list of notifications, newest first.

    Every rule runs independently; nothing is de-duplicated.

    Args:
        transactions: Transactions; pending ones produce review alerts
        aggregated_budgets: BudgetUsage values (or the dict returned by
            ``aggregate_spend``); overspent ones produce alerts
        today: Reference date for budget, remittance and lease alerts
        properties: Properties checked for upcoming lease expiry
        lease_window_days: How far ahead a lease end triggers an alert

    Returns:
        Notifications sorted by date, descending. Ties keep rule order.
    """
    usages = (
        aggregated_budgets.values()
        if isinstance(aggregated_budgets, dict)
        else aggregated_budgets
    )

    notifications: list[Notification] = []
    notifications.extend(pending_notifications(transactions))
    notifications.extend(budget_notifications(usages, today))
    if today.month in QUARTER_END_MONTHS:
        notifications.append(
            Notification(
                id="hst-remit",
                type=NotificationType.HST_REMITTANCE,
                message="Quarterly HST Remittance due soon.",
                date=today,
            )
        )
    notifications.extend(lease_notifications(properties, today, lease_window_days))

    return sorted(notifications, key=lambda n: n.date, reverse=True)
