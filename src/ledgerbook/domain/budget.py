"""Month-scoped budget aggregation."""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from ledgerbook.domain.entities import (
    ZERO,
    BudgetCategory,
    BudgetUsage,
    LedgerType,
    Transaction,
)
from ledgerbook.domain.errors import ValidationError
from ledgerbook.utils.amount_parser import to_decimal

BudgetKey = tuple[LedgerType, str]


def normalize_category(category: str) -> str:
    """Trim and case-fold a category for matching."""
    return (category or "").strip().casefold()


def sum_monthly_spend(
    transactions: Iterable[Transaction], month: int, year: int, normalize: bool = True
) -> dict[BudgetKey, Decimal]:
    """Sum outflows per ``(ledger, category)`` for one calendar month.

    Only transactions with a negative amount dated within the month count;
    the absolute amount is summed.
    """
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")

    spending: dict[BudgetKey, Decimal] = defaultdict(lambda: ZERO)
    for txn in transactions:
        amount = to_decimal(txn.amount, "amount")
        if amount >= 0:
            continue
        if txn.date.month != month or txn.date.year != year:
            continue
        category = normalize_category(txn.category) if normalize else txn.category
        spending[(LedgerType(txn.ledger_type), category)] += -amount

    return dict(spending)


def aggregate_spend(
    transactions: Iterable[Transaction],
    budget_defs: Iterable[BudgetCategory],
    month: int,
    year: int,
    normalize: bool = True,
) -> dict[BudgetKey, BudgetUsage]:
    """Join budget definitions with their actual spend for a month.

    Args:
        transactions: All transactions; filtering happens here
        budget_defs: Budget definitions, one per ``(ledger, category)``
        month: Calendar month, 1-12
        year: Calendar year
        normalize: Match categories after trimming and case-folding. When
            False, categories must match exactly.

    Returns:
        Mapping of ``(ledger, budget category)`` to BudgetUsage. Definitions
        with no matching spend get 0. Spend without a definition is omitted.

    Raises:
        InvalidNumericInputError: If a limit is negative or non-finite
        ValidationError: If the month is out of range
    """
    spending = sum_monthly_spend(transactions, month, year, normalize=normalize)

    usages: dict[BudgetKey, BudgetUsage] = {}
    for budget in budget_defs:
        to_decimal(budget.limit, "limit", non_negative=True)
        lookup = normalize_category(budget.category) if normalize else budget.category
        spent = spending.get((LedgerType(budget.ledger_type), lookup), ZERO)
        usages[budget.key] = BudgetUsage(budget=budget, spent=spent)

    return usages


def usages_by_ledger(
    usages: dict[BudgetKey, BudgetUsage] | Iterable[BudgetUsage],
) -> dict[LedgerType, list[BudgetUsage]]:
    """Group budget usages by ledger; every ledger is present, possibly empty."""
    values = usages.values() if isinstance(usages, dict) else usages
    grouped: dict[LedgerType, list[BudgetUsage]] = {ledger: [] for ledger in LedgerType}
    for usage in values:
        grouped[usage.ledger_type].append(usage)
    return grouped


def ledger_totals(usages: Iterable[BudgetUsage]) -> tuple[Decimal, Decimal]:
    """Return ``(total spent, total limit)`` across usages."""
    total_spent = ZERO
    total_limit = ZERO
    for usage in usages:
        total_spent += usage.spent
        total_limit += usage.limit
    return total_spent, total_limit
