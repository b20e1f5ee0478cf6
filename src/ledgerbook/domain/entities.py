"""Domain model entities for ledgerbook.

These are pure data classes representing bookkeeping concepts, independent of
the database schema. Derived values (budget usage, notifications) are built by
the engine functions from their inputs and are never stored.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from ledgerbook.domain.errors import InvalidNumericInputError

ZERO = Decimal("0")
CENT = Decimal("0.01")
BALANCE_TOLERANCE = Decimal("0.01")


class LedgerType(str, Enum):
    """The three financial contexts a transaction can belong to."""

    ACTIVE = "active"
    PASSIVE = "passive"
    PERSONAL = "personal"


class AccountType(str, Enum):
    """Chart of accounts classification."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSE = "Expense"


class TaxForm(str, Enum):
    """Tax form a transaction is reported on."""

    T2125 = "t2125"
    T776 = "t776"


class TransactionStatus(str, Enum):
    POSTED = "posted"
    PENDING = "pending"


class JournalStatus(str, Enum):
    DRAFT = "draft"
    POSTED = "posted"


class PaymentMethod(str, Enum):
    """How an outflow was paid; selects the credited account."""

    CREDIT_CARD = "credit_card"
    BANK = "bank"
    CASH = "cash"


class NotificationType(str, Enum):
    PENDING_TX = "pending_tx"
    BUDGET_OVER = "budget_over"
    LEASE_EXPIRY = "lease_expiry"
    HST_REMITTANCE = "hst_remittance"


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    code: str
    name: str
    type: AccountType
    tax_line_t2125: Optional[str] = None
    tax_line_t776: Optional[str] = None
    description: Optional[str] = None

    def tax_line(self, tax_form: TaxForm) -> Optional[str]:
        """Return the tax line for the given form, if the account maps to one."""
        if tax_form == TaxForm.T2125:
            return self.tax_line_t2125
        return self.tax_line_t776


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``amount`` is signed: negative for outflows, positive for inflows.
    """

    id: int
    date: date
    vendor: str
    amount: Decimal
    ledger_type: LedgerType
    category: str
    tax_form: Optional[TaxForm] = None
    status: TransactionStatus = TransactionStatus.POSTED
    is_split: bool = False
    hst_included: bool = False
    hst_amount: Decimal = ZERO
    property_id: Optional[int] = None

    @property
    def is_outflow(self) -> bool:
        return self.amount < 0

    @property
    def is_pending(self) -> bool:
        return self.status == TransactionStatus.PENDING


@dataclass(frozen=True)
class JournalEntry:
    """Header of a double-entry posting."""

    date: date
    description: str
    reference_id: Optional[int] = None
    status: JournalStatus = JournalStatus.POSTED


@dataclass(frozen=True)
class LedgerLine:
    """One side of a posting. At most one of debit/credit is non-zero."""

    account_code: str
    account_name: str
    debit: Decimal = ZERO
    credit: Decimal = ZERO

    def __post_init__(self):
        if self.debit < 0 or self.credit < 0:
            raise InvalidNumericInputError(
                f"Ledger line for {self.account_code} has a negative side "
                f"(debit={self.debit}, credit={self.credit})"
            )
        if self.debit != 0 and self.credit != 0:
            raise InvalidNumericInputError(
                f"Ledger line for {self.account_code} cannot both debit and credit"
            )


@dataclass(frozen=True)
class JournalEntryPayload:
    """A journal entry header together with its ledger lines."""

    entry: JournalEntry
    lines: tuple[LedgerLine, ...]

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), ZERO)

    @property
    def is_balanced(self) -> bool:
        return abs(self.total_debit - self.total_credit) <= BALANCE_TOLERANCE


@dataclass(frozen=True)
class Property:
    """Rental property held in the passive ledger."""

    id: int
    address: str
    purchase_price: Decimal
    current_value: Decimal
    cca_class: str
    opening_ucc: Decimal
    additions: Decimal
    tenant_name: str = "Vacant"
    lease_end: Optional[date] = None
    mortgage_balance: Optional[Decimal] = None

    @property
    def equity(self) -> Decimal:
        return self.current_value - (self.mortgage_balance or ZERO)

    @property
    def is_occupied(self) -> bool:
        return self.tenant_name.strip().lower() not in ("", "vacant")


@dataclass(frozen=True)
class BudgetCategory:
    """Planned monthly spending limit for a category within one ledger.

    Identity is the ``(category, ledger_type)`` pair. Actual spend is not a
    field here; see :class:`BudgetUsage`.
    """

    category: str
    ledger_type: LedgerType
    limit: Decimal
    savings_goal: Optional[Decimal] = None
    id: Optional[int] = None

    @property
    def key(self) -> tuple[LedgerType, str]:
        return (self.ledger_type, self.category)


@dataclass(frozen=True)
class BudgetUsage:
    """A budget definition joined with its computed month spend."""

    budget: BudgetCategory
    spent: Decimal

    @property
    def category(self) -> str:
        return self.budget.category

    @property
    def ledger_type(self) -> LedgerType:
        return self.budget.ledger_type

    @property
    def limit(self) -> Decimal:
        return self.budget.limit

    @property
    def is_over(self) -> bool:
        return self.limit > 0 and self.spent > self.limit

    @property
    def overage(self) -> Decimal:
        return max(self.spent - self.limit, ZERO)

    @property
    def remaining(self) -> Decimal:
        return max(self.limit - self.spent, ZERO)

    @property
    def utilization(self) -> Optional[Decimal]:
        """Spent as a percentage of the limit, or None for a zero limit."""
        if self.limit == 0:
            return None
        return (self.spent / self.limit * 100).quantize(CENT)


@dataclass(frozen=True)
class Notification:
    """Derived dashboard alert."""

    id: str
    type: NotificationType
    message: str
    date: date
    related_id: Optional[str] = None
    amount: Optional[Decimal] = None


@dataclass(frozen=True)
class DraftTransaction:
    """Transaction candidate returned by the document-parsing service."""

    date: date
    vendor: str
    amount: Decimal
    description: Optional[str] = None
    category_guess: Optional[str] = None


@dataclass(frozen=True)
class AccountResolution:
    """Result of resolving a category string to an account code."""

    code: str
    tier: str
    unmatched: bool = False


@dataclass(frozen=True)
class SplitAllocation:
    """A captured amount apportioned between the active and passive ledgers."""

    gross: Decimal
    hst_amount: Decimal
    subtotal: Decimal
    active_amount: Decimal
    passive_amount: Decimal
    primary_ledger: LedgerType
    is_split: bool


@dataclass(frozen=True)
class InvoiceItem:
    description: str
    quantity: Decimal
    price: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    hst_amount: Decimal
    total: Decimal


@dataclass(frozen=True)
class Invoice:
    """A tax-exclusive invoice with its stored totals."""

    id: int
    invoice_number: str
    client_name: str
    invoice_date: date
    due_date: date
    items: tuple[InvoiceItem, ...]
    subtotal: Decimal
    hst_amount: Decimal
    total_amount: Decimal
    status: InvoiceStatus = InvoiceStatus.DRAFT
    client_email: str = ""
    client_address: str = ""
    notes: str = ""

    def is_overdue(self, today: date) -> bool:
        return self.status != InvoiceStatus.PAID and today > self.due_date


@dataclass(frozen=True)
class MileageLog:
    """One business trip. ``id`` is None until stored."""

    date: date
    distance_km: Decimal
    purpose: str = ""
    start_location: str = ""
    end_location: str = ""
    id: Optional[int] = None


@dataclass(frozen=True)
class CCASchedule:
    """One year of capital cost allowance for a property."""

    property_id: int
    cca_class: str
    class_rate: Decimal
    opening_ucc: Decimal
    additions: Decimal
    max_claim: Decimal
    claimed: Decimal
    closing_ucc: Decimal


@dataclass(frozen=True)
class TaxLineTotal:
    """Yearly total for one tax form line."""

    tax_form: TaxForm
    line: str
    account_code: str
    account_name: str
    amount: Decimal
    transaction_ids: tuple[int, ...] = field(default_factory=tuple)
