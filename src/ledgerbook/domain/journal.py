"""Double-entry journal generation for single transactions."""

from decimal import Decimal
from typing import Optional, Sequence

import structlog

from ledgerbook.domain import chart_of_accounts as coa
from ledgerbook.domain.category_resolver import DEFAULT_RESOLVER, CategoryResolver
from ledgerbook.domain.chart_of_accounts import DEFAULT_CHART, ChartOfAccounts
from ledgerbook.domain.entities import (
    BALANCE_TOLERANCE,
    ZERO,
    AccountType,
    JournalEntry,
    JournalEntryPayload,
    JournalStatus,
    LedgerLine,
    PaymentMethod,
    Transaction,
)
from ledgerbook.domain.errors import (
    InvalidNumericInputError,
    UnbalancedJournalEntryError,
)
from ledgerbook.utils.amount_parser import to_decimal

logger = structlog.get_logger(__name__)

PAYMENT_ACCOUNTS: dict[PaymentMethod, str] = {
    PaymentMethod.CREDIT_CARD: coa.CREDIT_CARD_PAYABLE,
    PaymentMethod.BANK: coa.BUSINESS_BANK,
    PaymentMethod.CASH: coa.CASH_ON_HAND,
}


def assert_balanced(lines: Sequence[LedgerLine]) -> None:
    """Check that total debits equal total credits within 0.01.

    Raises:
        UnbalancedJournalEntryError: If the totals differ beyond the tolerance
    """
    total_debit = sum((line.debit for line in lines), ZERO)
    total_credit = sum((line.credit for line in lines), ZERO)
    if abs(total_debit - total_credit) > BALANCE_TOLERANCE:
        logger.error(
            "unbalanced_journal_entry",
            total_debit=str(total_debit),
            total_credit=str(total_credit),
            accounts=[line.account_code for line in lines],
        )
        raise UnbalancedJournalEntryError(total_debit, total_credit)


class JournalEntryGenerator:
    """Builds balanced journal entries from transactions."""

    def __init__(
        self,
        chart: ChartOfAccounts = DEFAULT_CHART,
        resolver: Optional[CategoryResolver] = None,
    ):
        self.chart = chart
        self.resolver = resolver or (
            DEFAULT_RESOLVER if chart is DEFAULT_CHART else CategoryResolver(chart)
        )

    def _line(
        self, code: str, default_name: str, debit: Decimal = ZERO, credit: Decimal = ZERO
    ) -> LedgerLine:
        return LedgerLine(
            account_code=code,
            account_name=self.chart.account_name(code, default_name),
            debit=debit,
            credit=credit,
        )

    def generate(
        self,
        transaction: Transaction,
        payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
    ) -> JournalEntryPayload:
        """Generate the journal entry for one transaction.

        Outflows debit the resolved expense account (net of HST) and HST Paid
        (ITC), crediting the payment account with the gross amount. Inflows
        debit the business bank account with the gross amount and credit the
        resolved revenue account (net) and HST Collected. Zero-valued lines are
        omitted.

        Args:
            transaction: Transaction to post
            payment_method: Selects the credited account for outflows

        Returns:
            JournalEntryPayload with header and lines

        Raises:
            InvalidNumericInputError: If amounts are non-finite, HST is negative,
                or HST exceeds the gross amount
            UnbalancedJournalEntryError: If the generated lines do not balance
        """
        amount = to_decimal(transaction.amount, "amount")
        gross = abs(amount)
        hst = to_decimal(transaction.hst_amount or ZERO, "hst_amount", non_negative=True)
        if hst > gross:
            raise InvalidNumericInputError(
                f"HST amount {hst} exceeds gross amount {gross} for transaction {transaction.id}"
            )
        net = gross - hst

        if amount < 0:
            expense_code = self.resolver.resolve_account_code(
                transaction.category, AccountType.EXPENSE
            )
            payment_code = PAYMENT_ACCOUNTS[PaymentMethod(payment_method)]
            candidates = [
                self._line(expense_code, "Uncategorized Expense", debit=net),
                self._line(coa.HST_PAID_ITC, "HST Paid (ITC)", debit=hst),
                self._line(payment_code, "Payment Account", credit=gross),
            ]
        else:
            revenue_code = self.resolver.resolve_account_code(
                transaction.category, AccountType.REVENUE
            )
            candidates = [
                self._line(coa.BUSINESS_BANK, "Business Bank Account", debit=gross),
                self._line(revenue_code, "Commission Income", credit=net),
                self._line(coa.HST_COLLECTED, "HST Collected", credit=hst),
            ]

        lines = tuple(line for line in candidates if line.debit or line.credit)
        assert_balanced(lines)

        entry = JournalEntry(
            date=transaction.date,
            description=f"{transaction.vendor} - {transaction.category}",
            reference_id=transaction.id,
            status=JournalStatus.POSTED,
        )
        logger.debug(
            "journal_entry_generated",
            transaction_id=transaction.id,
            lines=len(lines),
            gross=str(gross),
        )
        return JournalEntryPayload(entry=entry, lines=lines)


DEFAULT_GENERATOR = JournalEntryGenerator()


def generate_journal_entry(
    transaction: Transaction,
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
    chart: Optional[ChartOfAccounts] = None,
    resolver: Optional[CategoryResolver] = None,
) -> JournalEntryPayload:
    """Generate a journal entry, by default against the default chart of accounts."""
    if chart is None and resolver is None:
        return DEFAULT_GENERATOR.generate(transaction, payment_method)
    generator = JournalEntryGenerator(chart or DEFAULT_CHART, resolver)
    return generator.generate(transaction, payment_method)
