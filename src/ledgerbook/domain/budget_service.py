"""Budget and dashboard services backed by the record store."""

from datetime import date
from typing import Iterable

import structlog

from ledgerbook.database.base import Database
from ledgerbook.domain.budget import aggregate_spend, usages_by_ledger
from ledgerbook.domain.entities import (
    BudgetCategory,
    BudgetUsage,
    LedgerType,
    Notification,
)
from ledgerbook.domain.errors import ValidationError
from ledgerbook.domain.notifications import DEFAULT_LEASE_WINDOW_DAYS, derive_notifications
from ledgerbook.utils.amount_parser import to_decimal
from ledgerbook.utils.date_parser import month_bounds

logger = structlog.get_logger(__name__)


class BudgetService:
    """Service for budget definitions and their monthly utilisation."""

    def __init__(self, db: Database, normalize_categories: bool = True):
        """Initialize budget service.

        Args:
            db: Database instance
            normalize_categories: Match categories after trim + case-fold
        """
        self.db = db
        self.normalize_categories = normalize_categories

    def list_budgets(self, ledger_type: LedgerType | None = None) -> list[BudgetCategory]:
        return self.db.list_budgets(ledger_type=ledger_type)

    def save_budgets(self, ledger_type: LedgerType, budgets: Iterable[BudgetCategory]) -> None:
        """Replace a ledger's budget definitions.

        Raises:
            ValidationError: If a budget belongs to another ledger or a
                category appears twice
            InvalidNumericInputError: If a limit is negative or non-finite
        """
        ledger_type = LedgerType(ledger_type)
        budgets = list(budgets)
        seen: set[str] = set()
        for budget in budgets:
            if LedgerType(budget.ledger_type) != ledger_type:
                raise ValidationError(
                    f"Budget '{budget.category}' belongs to ledger '{budget.ledger_type}', "
                    f"not '{ledger_type.value}'"
                )
            key = budget.category.strip().casefold()
            if not key:
                raise ValidationError("Budget category is required")
            if key in seen:
                raise ValidationError(f"Duplicate budget category '{budget.category}'")
            seen.add(key)
            to_decimal(budget.limit, "limit", non_negative=True)
            if budget.savings_goal is not None:
                to_decimal(budget.savings_goal, "savings_goal", non_negative=True)

        self.db.replace_budgets(ledger_type, budgets)
        logger.info("budgets_saved", ledger_type=ledger_type.value, count=len(budgets))

    def get_usages(self, month: int, year: int) -> dict[tuple[LedgerType, str], BudgetUsage]:
        """Aggregate spend against every budget for one month."""
        start, end = month_bounds(month, year)
        transactions = self.db.list_transactions(start_date=start, end_date=end)
        return aggregate_spend(
            transactions,
            self.db.list_budgets(),
            month,
            year,
            normalize=self.normalize_categories,
        )

    def get_usages_by_ledger(self, month: int, year: int) -> dict[LedgerType, list[BudgetUsage]]:
        return usages_by_ledger(self.get_usages(month, year))

    def get_notifications(
        self, today: date, lease_window_days: int = DEFAULT_LEASE_WINDOW_DAYS
    ) -> list[Notification]:
        """Derive the notifications for the dashboard as of ``today``."""
        return derive_notifications(
            self.db.list_transactions(),
            self.get_usages(today.month, today.year),
            today,
            properties=self.db.list_properties(),
            lease_window_days=lease_window_days,
        )
