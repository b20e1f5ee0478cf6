"""Tests for the chart of accounts."""

import pytest

from ledgerbook.domain.chart_of_accounts import (
    DEFAULT_CHART,
    DEFAULT_CHART_OF_ACCOUNTS,
    ChartOfAccounts,
)
from ledgerbook.domain.entities import Account, AccountType
from ledgerbook.domain.errors import NotFoundError, ValidationError


def test_codes_are_unique():
    codes = [acc.code for acc in DEFAULT_CHART_OF_ACCOUNTS]
    assert len(codes) == len(set(codes))
    assert len(DEFAULT_CHART) == len(codes)


def test_lookup_by_code():
    assert DEFAULT_CHART.get("5160").name == "Fuel/Auto"
    assert "2110" in DEFAULT_CHART
    assert DEFAULT_CHART.get("9999") is None


def test_require_missing_code():
    with pytest.raises(NotFoundError):
        DEFAULT_CHART.require("9999")


def test_find_by_name_is_case_insensitive_and_type_scoped():
    account = DEFAULT_CHART.find_by_name("commission income", AccountType.REVENUE)
    assert account is not None and account.code == "4000"
    assert DEFAULT_CHART.find_by_name("commission income", AccountType.EXPENSE) is None


def test_by_type():
    liabilities = {acc.code for acc in DEFAULT_CHART.by_type(AccountType.LIABILITY)}
    assert liabilities == {"2000", "2100", "2110", "2200"}


def test_expense_tax_lines():
    assert DEFAULT_CHART.get("5010").tax_line_t2125 == "8523"
    assert DEFAULT_CHART.get("4100").tax_line_t776 == "8299"


def test_duplicate_codes_rejected():
    with pytest.raises(ValidationError):
        ChartOfAccounts(
            [
                Account("1000", "Cash", AccountType.ASSET),
                Account("1000", "Other Cash", AccountType.ASSET),
            ]
        )


def test_lookup_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CHART._by_code["1234"] = Account("1234", "X", AccountType.ASSET)
