"""Domain layer for ledgerbook application.

Engine modules (chart of accounts, category resolution, journal generation,
tax, budgets, notifications) are pure functions over entities. Services that
talk to a :class:`~ledgerbook.database.base.Database` live in their own
modules and are imported from there.
"""

from ledgerbook.domain.entities import (
    Account,
    AccountType,
    BudgetCategory,
    BudgetUsage,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    JournalEntry,
    JournalEntryPayload,
    LedgerLine,
    LedgerType,
    MileageLog,
    Notification,
    NotificationType,
    PaymentMethod,
    Property,
    TaxForm,
    Transaction,
    TransactionStatus,
)
from ledgerbook.domain.errors import (
    DomainError,
    InvalidNumericInputError,
    NotFoundError,
    UnbalancedJournalEntryError,
    ValidationError,
)

__all__ = [
    "Account",
    "AccountType",
    "BudgetCategory",
    "BudgetUsage",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "JournalEntry",
    "JournalEntryPayload",
    "LedgerLine",
    "LedgerType",
    "MileageLog",
    "Notification",
    "NotificationType",
    "PaymentMethod",
    "Property",
    "TaxForm",
    "Transaction",
    "TransactionStatus",
    "DomainError",
    "InvalidNumericInputError",
    "NotFoundError",
    "UnbalancedJournalEntryError",
    "ValidationError",
]
