"""Abstract record store interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid pulling services in through domain/__init__.py
from ledgerbook.domain.entities import (
    BudgetCategory,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    JournalEntryPayload,
    LedgerType,
    MileageLog,
    Property,
    TaxForm,
    Transaction,
    TransactionStatus,
)


class Database(ABC):
    """Abstract database interface for ledgerbook.

    The computation engine never calls this; services fetch collections here
    and pass them to engine functions.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        date: date,
        vendor: str,
        amount: Decimal,
        ledger_type: LedgerType,
        category: str,
        tax_form: Optional[TaxForm] = None,
        status: TransactionStatus = TransactionStatus.POSTED,
        is_split: bool = False,
        hst_included: bool = False,
        hst_amount: Decimal = Decimal("0"),
        property_id: Optional[int] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        ledger_type: Optional[LedgerType] = None,
        status: Optional[TransactionStatus] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, ordered by date then ID."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, **fields) -> None:
        """Update the given transaction fields."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction and the journal entries referencing it."""
        pass

    # Property operations
    @abstractmethod
    def create_property(
        self,
        address: str,
        purchase_price: Decimal,
        current_value: Decimal,
        cca_class: str,
        opening_ucc: Decimal,
        additions: Decimal,
        tenant_name: str = "Vacant",
        lease_end: Optional[date] = None,
        mortgage_balance: Optional[Decimal] = None,
    ) -> int:
        """Create a property. Returns property ID."""
        pass

    @abstractmethod
    def get_property(self, property_id: int) -> Optional[Property]:
        """Get property by ID."""
        pass

    @abstractmethod
    def list_properties(self) -> list[Property]:
        """List all properties."""
        pass

    # Budget operations
    @abstractmethod
    def list_budgets(self, ledger_type: Optional[LedgerType] = None) -> list[BudgetCategory]:
        """List budget definitions, optionally for one ledger."""
        pass

    @abstractmethod
    def replace_budgets(
        self, ledger_type: LedgerType, budgets: Sequence[BudgetCategory]
    ) -> None:
        """Replace all budget definitions of a ledger."""
        pass

    @abstractmethod
    def post_transaction(self, transaction_id: int, payload: JournalEntryPayload) -> int:
        """Mark a transaction posted and store its journal entry atomically.

        Either both writes are stored or neither is. Returns entry ID.
        """
        pass

    # Journal operations
    @abstractmethod
    def create_journal_entry(self, payload: JournalEntryPayload) -> int:
        """Store a journal entry with its lines. Returns entry ID."""
        pass

    @abstractmethod
    def list_journal_entries(
        self, reference_id: Optional[int] = None
    ) -> list[JournalEntryPayload]:
        """List journal entries, optionally for one originating transaction."""
        pass

    # Mileage operations
    @abstractmethod
    def create_mileage_log(
        self,
        date: date,
        distance_km: Decimal,
        purpose: str = "",
        start_location: str = "",
        end_location: str = "",
    ) -> int:
        """Create a mileage log entry. Returns log ID."""
        pass

    @abstractmethod
    def list_mileage_logs(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[MileageLog]:
        """List mileage logs with optional date range, ordered by date then ID."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(
        self,
        invoice_number: str,
        client_name: str,
        invoice_date: date,
        due_date: date,
        items: Sequence[InvoiceItem],
        subtotal: Decimal,
        hst_amount: Decimal,
        total_amount: Decimal,
        status: InvoiceStatus = InvoiceStatus.DRAFT,
        client_email: str = "",
        client_address: str = "",
        notes: str = "",
    ) -> int:
        """Create an invoice with its items. Returns invoice ID."""
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def get_invoice_by_number(self, invoice_number: str) -> Optional[Invoice]:
        """Get invoice by its invoice number."""
        pass

    @abstractmethod
    def list_invoices(self, status: Optional[InvoiceStatus] = None) -> list[Invoice]:
        """List invoices, optionally by status, ordered by invoice date then ID."""
        pass

    @abstractmethod
    def update_invoice_status(self, invoice_id: int, status: InvoiceStatus) -> None:
        """Change the status of an invoice."""
        pass
