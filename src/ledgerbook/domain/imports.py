"""Turn document-parser drafts into transactions."""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ledgerbook.domain.category_resolver import DEFAULT_RESOLVER, CategoryResolver
from ledgerbook.domain.entities import (
    ZERO,
    AccountResolution,
    AccountType,
    DraftTransaction,
    LedgerType,
    Transaction,
    TransactionStatus,
)
from ledgerbook.domain.errors import ValidationError
from ledgerbook.domain.tax import HST_RATE, decompose_tax
from ledgerbook.domain.tax_lines import LEDGER_TAX_FORMS
from ledgerbook.utils.amount_parser import to_decimal
from ledgerbook.utils.date_parser import parse_date

UNCATEGORIZED = "Uncategorized"


def draft_from_dict(data: dict[str, Any]) -> DraftTransaction:
    """Build a draft from one record of the document parser's JSON output.

    Raises:
        ValidationError: If date, vendor or amount is missing or malformed
    """
    missing = [key for key in ("date", "vendor", "amount") if data.get(key) in (None, "")]
    if missing:
        raise ValidationError(f"Draft is missing required fields: {', '.join(missing)}")

    raw_date = data["date"]
    try:
        draft_date = raw_date if isinstance(raw_date, date) else parse_date(str(raw_date))
    except ValueError as e:
        raise ValidationError(str(e))

    return DraftTransaction(
        date=draft_date,
        vendor=str(data["vendor"]),
        amount=to_decimal(data["amount"], "amount"),
        description=data.get("description"),
        category_guess=data.get("category_guess") or data.get("categoryGuess"),
    )


def resolve_draft_account(
    draft: DraftTransaction, resolver: CategoryResolver = DEFAULT_RESOLVER
) -> AccountResolution:
    """Resolve the draft's category guess like any other transaction category."""
    account_type = AccountType.EXPENSE if draft.amount < 0 else AccountType.REVENUE
    return resolver.resolve(draft.category_guess, account_type)


def draft_to_transaction(
    draft: DraftTransaction,
    ledger_type: LedgerType,
    property_id: Optional[int] = None,
    rate: Decimal = HST_RATE,
    transaction_id: int = 0,
) -> Transaction:
    """Convert a draft to a pending transaction.

    Expenses are assumed to include HST and have it decomposed; income has
    none. The tax form follows the ledger and the property only applies to
    the passive ledger.
    """
    ledger_type = LedgerType(ledger_type)
    amount = to_decimal(draft.amount, "amount")
    is_expense = amount < 0
    return Transaction(
        id=transaction_id,
        date=draft.date,
        vendor=draft.vendor,
        amount=amount,
        ledger_type=ledger_type,
        category=(draft.category_guess or "").strip() or UNCATEGORIZED,
        tax_form=LEDGER_TAX_FORMS.get(ledger_type),
        status=TransactionStatus.PENDING,
        is_split=False,
        hst_included=is_expense,
        hst_amount=decompose_tax(amount, True, rate) if is_expense else ZERO,
        property_id=property_id if ledger_type == LedgerType.PASSIVE else None,
    )
