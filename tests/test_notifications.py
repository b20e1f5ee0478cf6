"""Tests for derived notifications."""

from datetime import date
from decimal import Decimal

from ledgerbook.domain.budget import aggregate_spend
from ledgerbook.domain.entities import (
    BudgetCategory,
    BudgetUsage,
    LedgerType,
    NotificationType,
    Property,
    TransactionStatus,
)
from ledgerbook.domain.notifications import derive_notifications


def _usage(category, limit, spent, ledger=LedgerType.ACTIVE):
    budget = BudgetCategory(category=category, ledger_type=ledger, limit=Decimal(limit))
    return BudgetUsage(budget=budget, spent=Decimal(spent))


def _property(lease_end, id=1):
    return Property(
        id=id,
        address="12 Elm Street",
        purchase_price=Decimal("800000"),
        current_value=Decimal("800000"),
        cca_class="1",
        opening_ucc=Decimal("780000"),
        additions=Decimal("0"),
        tenant_name="J. Smith",
        lease_end=lease_end,
    )


def _of_type(notifications, notification_type):
    return [n for n in notifications if n.type == notification_type]


def test_budget_over_notification(make_transaction):
    transactions = [
        make_transaction("-150", category="Meals", id=1),
        make_transaction("-100", category="Meals", id=2),
    ]
    budgets = [BudgetCategory(category="Meals", ledger_type=LedgerType.ACTIVE, limit=Decimal("200"))]
    usages = aggregate_spend(transactions, budgets, 3, 2024)

    notifications = derive_notifications(transactions, usages, today=date(2024, 4, 2))

    over = _of_type(notifications, NotificationType.BUDGET_OVER)
    assert len(over) == 1
    assert over[0].amount == Decimal("50")
    assert over[0].id == "budget-active-Meals"
    assert over[0].message == "Over Budget: Meals (-$50)"
    assert over[0].date == date(2024, 4, 2)


def test_overage_rounds_to_whole_units():
    notifications = derive_notifications(
        [], [_usage("Meals", "200", "250.50")], today=date(2024, 4, 2)
    )
    assert notifications[0].amount == Decimal("51")


def test_at_limit_is_not_over():
    notifications = derive_notifications(
        [], [_usage("Meals", "200", "200")], today=date(2024, 4, 2)
    )
    assert notifications == []


def test_pending_transaction_review(make_transaction):
    txn = make_transaction(
        "-45.20", vendor="Staples", id=9, status=TransactionStatus.PENDING, txn_date=date(2024, 1, 20)
    )
    posted = make_transaction("-10", id=10)

    notifications = derive_notifications([txn, posted], [], today=date(2024, 2, 1))

    assert len(notifications) == 1
    assert notifications[0].id == "tx-9"
    assert notifications[0].type == NotificationType.PENDING_TX
    assert notifications[0].message == "Review: Staples ($45.20)"
    assert notifications[0].date == date(2024, 1, 20)
    assert notifications[0].related_id == "9"


def test_hst_remittance_in_quarter_end_months():
    for month in (3, 6, 9, 12):
        notifications = derive_notifications([], [], today=date(2024, month, 15))
        assert [n.id for n in notifications] == ["hst-remit"]
        assert notifications[0].message == "Quarterly HST Remittance due soon."

    for month in (1, 2, 4, 5, 7, 8, 10, 11):
        assert derive_notifications([], [], today=date(2024, month, 15)) == []


def test_lease_expiry_window():
    today = date(2024, 2, 1)
    properties = [
        _property(date(2024, 3, 15), id=1),
        _property(date(2024, 8, 1), id=2),
        _property(date(2024, 1, 1), id=3),
        _property(None, id=4),
    ]

    notifications = derive_notifications([], [], today=today, properties=properties)

    assert [n.id for n in notifications] == ["lease-1"]
    wide = derive_notifications(
        [], [], today=today, properties=properties, lease_window_days=200
    )
    assert {n.id for n in wide} == {"lease-1", "lease-2"}


def test_sorted_newest_first(make_transaction):
    older = make_transaction("-5", id=1, status=TransactionStatus.PENDING, txn_date=date(2024, 1, 5))
    newer = make_transaction("-5", id=2, status=TransactionStatus.PENDING, txn_date=date(2024, 3, 1))

    notifications = derive_notifications(
        [older, newer], [_usage("Meals", "10", "20")], today=date(2024, 3, 20)
    )

    dates = [n.date for n in notifications]
    assert dates == sorted(dates, reverse=True)
    # budget and remittance share today's date and keep rule order
    assert [n.id for n in notifications[:2]] == ["budget-active-Meals", "hst-remit"]
    assert [n.id for n in notifications[2:]] == ["tx-2", "tx-1"]


def test_rules_are_independent(make_transaction):
    pending = make_transaction("-300", category="Meals", id=1, status=TransactionStatus.PENDING)
    notifications = derive_notifications(
        [pending], [_usage("Meals", "200", "300")], today=date(2024, 3, 10)
    )
    types = [n.type for n in notifications]
    assert NotificationType.PENDING_TX in types
    assert NotificationType.BUDGET_OVER in types
