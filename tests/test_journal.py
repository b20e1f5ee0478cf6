"""Tests for double-entry journal generation."""

import pytest
from datetime import date
from decimal import Decimal
from structlog.testing import capture_logs

from ledgerbook.domain.entities import (
    JournalStatus,
    LedgerLine,
    LedgerType,
    PaymentMethod,
)
from ledgerbook.domain.errors import (
    InvalidNumericInputError,
    UnbalancedJournalEntryError,
)
from ledgerbook.domain.journal import assert_balanced, generate_journal_entry


def _by_code(payload):
    return {line.account_code: line for line in payload.lines}


class TestOutflows:
    """Expenses debit the expense account and HST Paid, credit the payment account."""

    def test_fuel_on_credit_card(self, make_transaction):
        txn = make_transaction(
            "-113.00", category="Fuel/Auto", vendor="Shell", hst_amount="13.00", hst_included=True
        )

        payload = generate_journal_entry(txn, PaymentMethod.CREDIT_CARD)
        lines = _by_code(payload)

        assert set(lines) == {"5160", "2110", "2000"}
        assert lines["5160"].debit == Decimal("100.00")
        assert lines["2110"].debit == Decimal("13.00")
        assert lines["2000"].credit == Decimal("113.00")
        assert payload.is_balanced

    def test_header(self, make_transaction):
        txn = make_transaction("-20", category="Meals", vendor="Cafe", id=42)

        payload = generate_journal_entry(txn)

        assert payload.entry.description == "Cafe - Meals"
        assert payload.entry.reference_id == 42
        assert payload.entry.status == JournalStatus.POSTED
        assert payload.entry.date == date(2024, 3, 10)

    @pytest.mark.parametrize(
        "method,code",
        [
            (PaymentMethod.CREDIT_CARD, "2000"),
            (PaymentMethod.BANK, "1010"),
            (PaymentMethod.CASH, "1000"),
        ],
    )
    def test_payment_method_selects_credit_account(self, make_transaction, method, code):
        payload = generate_journal_entry(make_transaction("-50"), method)
        credits = [line for line in payload.lines if line.credit]
        assert [line.account_code for line in credits] == [code]

    def test_payment_method_accepts_string(self, make_transaction):
        payload = generate_journal_entry(make_transaction("-50"), "bank")
        assert "1010" in _by_code(payload)

    def test_zero_hst_line_omitted(self, make_transaction):
        payload = generate_journal_entry(make_transaction("-50", category="Office"))
        lines = _by_code(payload)
        assert "2110" not in lines
        assert lines["5060"].debit == Decimal("50")

    def test_unmatched_category_goes_to_personal_expense(self, make_transaction):
        payload = generate_journal_entry(make_transaction("-30", category="Groceries"))
        lines = _by_code(payload)
        assert lines["5200"].account_name == "Personal Expense"


class TestInflows:
    """Income debits the bank and credits revenue and HST Collected."""

    def test_commission_without_hst(self, make_transaction):
        txn = make_transaction("1000", category="Commission", vendor="Brokerage")

        payload = generate_journal_entry(txn)
        lines = _by_code(payload)

        assert set(lines) == {"1010", "4000"}
        assert lines["1010"].debit == Decimal("1000")
        assert lines["4000"].credit == Decimal("1000")

    def test_commission_with_hst(self, make_transaction):
        txn = make_transaction("1130.00", category="Commission", hst_amount="130.00")

        lines = _by_code(generate_journal_entry(txn))

        assert lines["1010"].debit == Decimal("1130.00")
        assert lines["4000"].credit == Decimal("1000.00")
        assert lines["2100"].credit == Decimal("130.00")

    def test_rental_income_direct_match(self, make_transaction):
        txn = make_transaction("2500", category="Rental Income", ledger_type=LedgerType.PASSIVE)
        assert "4100" in _by_code(generate_journal_entry(txn))

    def test_zero_amount_has_no_lines(self, make_transaction):
        payload = generate_journal_entry(make_transaction("0"))
        assert payload.lines == ()
        assert payload.is_balanced


class TestValidation:
    def test_hst_above_gross_rejected(self, make_transaction):
        with pytest.raises(InvalidNumericInputError):
            generate_journal_entry(make_transaction("-10", hst_amount="11"))

    def test_negative_hst_rejected(self, make_transaction):
        with pytest.raises(InvalidNumericInputError):
            generate_journal_entry(make_transaction("-10", hst_amount="-1"))

    def test_non_finite_amount_rejected(self, make_transaction):
        with pytest.raises(InvalidNumericInputError):
            generate_journal_entry(make_transaction("NaN"))

    def test_assert_balanced_raises(self):
        lines = [
            LedgerLine("5010", "Meals", debit=Decimal("10.00")),
            LedgerLine("2000", "Credit Card Payable", credit=Decimal("9.00")),
        ]
        with capture_logs() as logs, pytest.raises(UnbalancedJournalEntryError) as excinfo:
            assert_balanced(lines)
        assert logs[0]["event"] == "unbalanced_journal_entry"
        assert logs[0]["log_level"] == "error"
        assert excinfo.value.total_debit == Decimal("10.00")
        assert excinfo.value.total_credit == Decimal("9.00")

    def test_assert_balanced_tolerance(self):
        assert_balanced(
            [
                LedgerLine("5010", "Meals", debit=Decimal("10.00")),
                LedgerLine("2000", "Credit Card Payable", credit=Decimal("9.99")),
            ]
        )


@pytest.mark.parametrize(
    "amount,hst",
    [
        ("-113.00", "13.00"),
        ("-0.01", "0"),
        ("-99999.99", "11504.42"),
        ("1130.00", "130.00"),
        ("45.67", "5.25"),
        ("-45.67", "45.67"),
    ],
)
@pytest.mark.parametrize("method", list(PaymentMethod))
def test_every_entry_balances(make_transaction, amount, hst, method):
    payload = generate_journal_entry(make_transaction(amount, hst_amount=hst), method)
    assert payload.total_debit == payload.total_credit
    for line in payload.lines:
        assert line.debit >= 0 and line.credit >= 0
        assert not (line.debit and line.credit)


def test_custom_chart_and_resolver(make_transaction):
    from ledgerbook.domain.category_resolver import CategoryResolver, KeywordRule
    from ledgerbook.domain.chart_of_accounts import DEFAULT_CHART_OF_ACCOUNTS, ChartOfAccounts
    from ledgerbook.domain.entities import Account, AccountType

    chart = ChartOfAccounts(
        DEFAULT_CHART_OF_ACCOUNTS + (Account("5300", "Groceries Reimbursable", AccountType.EXPENSE),)
    )
    resolver = CategoryResolver(chart, keyword_rules=(KeywordRule(("grocer",), "5300"),))

    payload = generate_journal_entry(
        make_transaction("-40", category="Grocery run"), chart=chart, resolver=resolver
    )

    assert _by_code(payload)["5300"].account_name == "Groceries Reimbursable"
