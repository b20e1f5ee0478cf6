"""Tests for BudgetService."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerbook.domain.budget_service import BudgetService
from ledgerbook.domain.entities import (
    BudgetCategory,
    LedgerType,
    NotificationType,
    TransactionStatus,
)
from ledgerbook.domain.errors import InvalidNumericInputError, ValidationError


def _budget(category, limit, ledger=LedgerType.ACTIVE, savings_goal=None):
    return BudgetCategory(
        category=category,
        ledger_type=ledger,
        limit=Decimal(limit),
        savings_goal=savings_goal,
    )


def _spend(transaction_service, amount, category="Meals", day=10, **kwargs):
    return transaction_service.create_transaction(
        date=date(2024, 3, day),
        vendor="Vendor",
        amount=Decimal(amount),
        ledger_type=kwargs.pop("ledger_type", LedgerType.ACTIVE),
        category=category,
        **kwargs,
    )


class TestSaveBudgets:
    def test_save_and_list(self, budget_service):
        budget_service.save_budgets(
            LedgerType.ACTIVE, [_budget("Meals", "200"), _budget("Advertising", "300")]
        )
        budget_service.save_budgets(
            LedgerType.PERSONAL,
            [_budget("Groceries", "600", LedgerType.PERSONAL, savings_goal=Decimal("100"))],
        )

        active = budget_service.list_budgets(LedgerType.ACTIVE)
        assert [b.category for b in active] == ["Advertising", "Meals"]
        personal = budget_service.list_budgets(LedgerType.PERSONAL)
        assert personal[0].savings_goal == Decimal("100")
        assert len(budget_service.list_budgets()) == 3

    def test_save_replaces_ledger_only(self, budget_service):
        budget_service.save_budgets(LedgerType.ACTIVE, [_budget("Meals", "200")])
        budget_service.save_budgets(
            LedgerType.PERSONAL, [_budget("Groceries", "600", LedgerType.PERSONAL)]
        )
        budget_service.save_budgets(LedgerType.ACTIVE, [_budget("Travel", "50")])

        assert [b.category for b in budget_service.list_budgets()] == ["Travel", "Groceries"]

    def test_wrong_ledger(self, budget_service):
        with pytest.raises(ValidationError):
            budget_service.save_budgets(
                LedgerType.ACTIVE, [_budget("Groceries", "600", LedgerType.PERSONAL)]
            )

    def test_duplicate_category(self, budget_service):
        with pytest.raises(ValidationError):
            budget_service.save_budgets(
                LedgerType.ACTIVE, [_budget("Meals", "200"), _budget(" meals", "100")]
            )

    def test_negative_limit(self, budget_service):
        with pytest.raises(InvalidNumericInputError):
            budget_service.save_budgets(LedgerType.ACTIVE, [_budget("Meals", "-5")])


def test_usages_for_month(budget_service, transaction_service):
    budget_service.save_budgets(LedgerType.ACTIVE, [_budget("Meals", "200")])
    _spend(transaction_service, "-150")
    _spend(transaction_service, "-100", category="MEALS")
    # pending outflows count toward the month
    _spend(transaction_service, "-999", day=1, category="Meals", status=TransactionStatus.PENDING)
    transaction_service.create_transaction(
        date=date(2024, 4, 1),
        vendor="Vendor",
        amount=Decimal("-500"),
        ledger_type=LedgerType.ACTIVE,
        category="Meals",
    )

    usages = budget_service.get_usages(3, 2024)

    assert usages[(LedgerType.ACTIVE, "Meals")].spent == Decimal("1249")


def test_usages_without_normalization(temp_db, transaction_service):
    service = BudgetService(temp_db, normalize_categories=False)
    service.save_budgets(LedgerType.ACTIVE, [_budget("Meals", "200")])
    _spend(transaction_service, "-150")
    _spend(transaction_service, "-100", category="MEALS")

    assert service.get_usages(3, 2024)[(LedgerType.ACTIVE, "Meals")].spent == Decimal("150")


def test_usages_by_ledger(budget_service, transaction_service):
    budget_service.save_budgets(LedgerType.ACTIVE, [_budget("Meals", "200")])
    _spend(transaction_service, "-50")

    grouped = budget_service.get_usages_by_ledger(3, 2024)

    assert len(grouped[LedgerType.ACTIVE]) == 1
    assert grouped[LedgerType.PASSIVE] == []
    assert grouped[LedgerType.PERSONAL] == []


def test_notifications(budget_service, transaction_service, sample_property):
    budget_service.save_budgets(LedgerType.ACTIVE, [_budget("Meals", "200")])
    _spend(transaction_service, "-250")
    _spend(transaction_service, "-12.34", category="Office", status=TransactionStatus.PENDING)

    notifications = budget_service.get_notifications(today=date(2024, 3, 20))

    by_type = {n.type: n for n in notifications}
    assert by_type[NotificationType.BUDGET_OVER].amount == Decimal("50")
    assert by_type[NotificationType.PENDING_TX].message == "Review: Vendor ($12.34)"
    assert NotificationType.HST_REMITTANCE in by_type
    # sample lease ends 2024-04-30, within 60 days
    assert by_type[NotificationType.LEASE_EXPIRY].related_id == str(sample_property.id)
