"""Yearly totals per T2125/T776 tax line."""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional

import structlog

from ledgerbook.domain import chart_of_accounts as coa
from ledgerbook.domain.category_resolver import DEFAULT_RESOLVER, CategoryResolver
from ledgerbook.domain.chart_of_accounts import DEFAULT_CHART, ChartOfAccounts
from ledgerbook.domain.entities import (
    ZERO,
    AccountType,
    LedgerType,
    TaxForm,
    TaxLineTotal,
    Transaction,
)
from ledgerbook.utils.amount_parser import to_decimal

logger = structlog.get_logger(__name__)

LEDGER_TAX_FORMS: dict[LedgerType, TaxForm] = {
    LedgerType.ACTIVE: TaxForm.T2125,
    LedgerType.PASSIVE: TaxForm.T776,
}

# Revenue fallback per form when a category matches no revenue account by name
REVENUE_FALLBACKS: dict[TaxForm, str] = {
    TaxForm.T2125: coa.COMMISSION_INCOME,
    TaxForm.T776: coa.RENTAL_INCOME,
}

UNASSIGNED_LINE = "unassigned"


def effective_tax_form(txn: Transaction) -> Optional[TaxForm]:
    """Explicit tax form, else the form implied by the ledger (None for personal)."""
    if txn.tax_form is not None:
        return TaxForm(txn.tax_form)
    return LEDGER_TAX_FORMS.get(LedgerType(txn.ledger_type))


def _account_code(
    resolver: CategoryResolver, category: str, account_type: AccountType, tax_form: TaxForm
) -> str:
    resolution = resolver.resolve(category, account_type)
    if account_type == AccountType.REVENUE and resolution.unmatched:
        return REVENUE_FALLBACKS[tax_form]
    return resolution.code


def summarize_tax_lines(
    transactions: Iterable[Transaction],
    tax_form: TaxForm,
    year: int,
    chart: ChartOfAccounts = DEFAULT_CHART,
    resolver: Optional[CategoryResolver] = None,
) -> list[TaxLineTotal]:
    """Sum net-of-HST amounts per tax line for one form and year.

    Outflows resolve against expense accounts and inflows against revenue
    accounts. Unmatched inflows fall back to the form's own income account,
    so rent on T776 lands on Rental Income. Accounts with no line on the
    selected form are reported under ``UNASSIGNED_LINE`` rather than dropped.

    Returns:
        TaxLineTotal records sorted by line, then account code
    """
    tax_form = TaxForm(tax_form)
    resolver = resolver or (
        DEFAULT_RESOLVER if chart is DEFAULT_CHART else CategoryResolver(chart)
    )

    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    txn_ids: dict[str, list[int]] = defaultdict(list)
    for txn in transactions:
        if txn.date.year != year or effective_tax_form(txn) != tax_form:
            continue
        amount = to_decimal(txn.amount, "amount")
        account_type = AccountType.EXPENSE if amount < 0 else AccountType.REVENUE
        code = _account_code(resolver, txn.category, account_type, tax_form)
        hst = to_decimal(txn.hst_amount or ZERO, "hst_amount", non_negative=True)
        totals[code] += abs(amount) - hst
        txn_ids[code].append(txn.id)

    results = []
    for code, amount in totals.items():
        account = chart.get(code)
        line = account.tax_line(tax_form) if account is not None else None
        if line is None:
            logger.warning(
                "tax_line_unassigned",
                tax_form=tax_form.value,
                account_code=code,
                amount=str(amount),
            )
        results.append(
            TaxLineTotal(
                tax_form=tax_form,
                line=line or UNASSIGNED_LINE,
                account_code=code,
                account_name=account.name if account is not None else code,
                amount=amount,
                transaction_ids=tuple(txn_ids[code]),
            )
        )
    return sorted(results, key=lambda total: (total.line, total.account_code))
