"""Static chart of accounts.

Codes follow the usual ranges: 1000s assets, 2000s liabilities, 3000s equity,
4000s revenue, 5000s expenses. Expense accounts carry their CRA T2125 line.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from ledgerbook.domain.entities import Account, AccountType
from ledgerbook.domain.errors import NotFoundError, ValidationError

CASH_ON_HAND = "1000"
BUSINESS_BANK = "1010"
CREDIT_CARD_PAYABLE = "2000"
HST_COLLECTED = "2100"
HST_PAID_ITC = "2110"
COMMISSION_INCOME = "4000"
RENTAL_INCOME = "4100"
PERSONAL_EXPENSE = "5200"

DEFAULT_CHART_OF_ACCOUNTS: tuple[Account, ...] = (
    # Assets
    Account("1000", "Cash on Hand", AccountType.ASSET),
    Account("1010", "Business Bank Account", AccountType.ASSET),
    Account("1200", "Accounts Receivable", AccountType.ASSET),
    Account("1500", "Property - Buildings (Class 1)", AccountType.ASSET),
    Account("1510", "Property - Land", AccountType.ASSET),
    Account("1550", "Furniture & Equipment (Class 8)", AccountType.ASSET),
    Account("1560", "Vehicle (Class 10.1)", AccountType.ASSET),
    # Liabilities
    Account("2000", "Credit Card Payable", AccountType.LIABILITY),
    Account("2100", "HST Collected (Govt Payable)", AccountType.LIABILITY),
    Account(
        "2110",
        "HST Paid (ITC)",
        AccountType.LIABILITY,
        description="Contra-liability for recoverable input tax credits",
    ),
    Account("2200", "Mortgage Payable", AccountType.LIABILITY),
    # Equity
    Account("3000", "Owner's Capital", AccountType.EQUITY),
    Account("3100", "Owner's Draw", AccountType.EQUITY),
    # Revenue
    Account("4000", "Commission Income", AccountType.REVENUE, tax_line_t2125="3A"),
    Account("4100", "Rental Income", AccountType.REVENUE, tax_line_t776="8299"),
    Account("4200", "Consulting Income", AccountType.REVENUE),
    # Expenses
    Account("5000", "Advertising", AccountType.EXPENSE, tax_line_t2125="8521"),
    Account("5010", "Meals & Entertainment", AccountType.EXPENSE, tax_line_t2125="8523"),
    Account("5020", "Bad Debts", AccountType.EXPENSE, tax_line_t2125="8590"),
    Account("5030", "Insurance", AccountType.EXPENSE, tax_line_t2125="8690", tax_line_t776="8690"),
    Account("5040", "Interest", AccountType.EXPENSE, tax_line_t2125="8710", tax_line_t776="8710"),
    Account("5050", "Business Tax, Fees, Licenses", AccountType.EXPENSE, tax_line_t2125="8760"),
    Account("5060", "Office Expenses", AccountType.EXPENSE, tax_line_t2125="8810", tax_line_t776="8810"),
    Account("5070", "Supplies", AccountType.EXPENSE, tax_line_t2125="8811"),
    Account(
        "5080",
        "Legal, Accounting, Professional Fees",
        AccountType.EXPENSE,
        tax_line_t2125="8860",
        tax_line_t776="8860",
    ),
    Account(
        "5090",
        "Management & Admin Fees",
        AccountType.EXPENSE,
        tax_line_t2125="8871",
        tax_line_t776="8871",
    ),
    Account("5100", "Rent", AccountType.EXPENSE, tax_line_t2125="8910"),
    Account(
        "5110",
        "Repairs & Maintenance",
        AccountType.EXPENSE,
        tax_line_t2125="8960",
        tax_line_t776="8960",
    ),
    Account("5120", "Salaries & Wages", AccountType.EXPENSE, tax_line_t2125="9060", tax_line_t776="9060"),
    Account("5130", "Property Taxes", AccountType.EXPENSE, tax_line_t2125="9180", tax_line_t776="9180"),
    Account("5140", "Travel", AccountType.EXPENSE, tax_line_t2125="9200", tax_line_t776="9200"),
    Account(
        "5150",
        "Telephone & Utilities",
        AccountType.EXPENSE,
        tax_line_t2125="9220",
        tax_line_t776="9220",
    ),
    Account(
        "5160",
        "Fuel/Auto",
        AccountType.EXPENSE,
        tax_line_t2125="9281",
        tax_line_t776="9281",
        description="Motor vehicle expenses",
    ),
    Account("5200", "Personal Expense", AccountType.EXPENSE, description="Non-deductible"),
)


class ChartOfAccounts:
    """Read-only lookup over a set of accounts, keyed by code."""

    def __init__(self, accounts: Iterable[Account] = DEFAULT_CHART_OF_ACCOUNTS):
        """Build the lookup.

        Args:
            accounts: Account records; codes must be unique

        Raises:
            ValidationError: If two accounts share a code
        """
        by_code: dict[str, Account] = {}
        for account in accounts:
            if account.code in by_code:
                raise ValidationError(f"Duplicate account code '{account.code}'")
            by_code[account.code] = account
        self._by_code: Mapping[str, Account] = MappingProxyType(by_code)

    def __contains__(self, code: str) -> bool:
        return code in self._by_code

    def __iter__(self):
        return iter(self._by_code.values())

    def __len__(self) -> int:
        return len(self._by_code)

    def get(self, code: str) -> Optional[Account]:
        return self._by_code.get(code)

    def require(self, code: str) -> Account:
        """Get an account by code, raising NotFoundError if missing."""
        account = self._by_code.get(code)
        if account is None:
            raise NotFoundError(f"Account code '{code}' not found")
        return account

    def by_type(self, account_type: AccountType) -> list[Account]:
        return [acc for acc in self._by_code.values() if acc.type == account_type]

    def find_by_name(self, name: str, account_type: AccountType) -> Optional[Account]:
        """Case-insensitive exact name match within one account type."""
        normalized = name.lower()
        for account in self._by_code.values():
            if account.type == account_type and account.name.lower() == normalized:
                return account
        return None

    def account_name(self, code: str, default: str) -> str:
        account = self._by_code.get(code)
        return account.name if account is not None else default


DEFAULT_CHART = ChartOfAccounts()
