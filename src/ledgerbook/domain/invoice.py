"""Invoice domain service."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

import structlog

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import Invoice, InvoiceItem, InvoiceStatus
from ledgerbook.domain.errors import NotFoundError, ValidationError, invoice_not_found
from ledgerbook.domain.tax import HST_RATE, compute_invoice_totals
from ledgerbook.utils.amount_parser import to_decimal

logger = structlog.get_logger(__name__)

DEFAULT_PAYMENT_TERMS_DAYS = 30
DEFAULT_NOTES = "Thank you for your business!"


def next_invoice_number(existing: Iterable[str]) -> str:
    """Return the next zero-padded sequence number after the numeric ones in ``existing``."""
    highest = max((int(number) for number in existing if number.isdigit()), default=0)
    return f"{highest + 1:04d}"


class InvoiceService:
    """Service for issuing tax-exclusive invoices and tracking their status."""

    def __init__(self, db: Database, hst_rate: Decimal = HST_RATE):
        """Initialize invoice service.

        Args:
            db: Database instance
            hst_rate: Rate added on top of the invoice subtotal
        """
        self.db = db
        self.hst_rate = to_decimal(hst_rate, "hst_rate", non_negative=True)

    def create_invoice(
        self,
        client_name: str,
        items: Iterable[InvoiceItem],
        invoice_date: Optional[date] = None,
        due_date: Optional[date] = None,
        invoice_number: Optional[str] = None,
        client_email: str = "",
        client_address: str = "",
        notes: str = DEFAULT_NOTES,
    ) -> int:
        """Create a draft invoice with totals computed from its items.

        Args:
            client_name: Who is billed
            items: Line items; at least one is required
            invoice_date: Defaults to today
            due_date: Defaults to 30 days after the invoice date
            invoice_number: Defaults to the next number in sequence
            client_email: Client contact email
            client_address: Client mailing address
            notes: Free text printed on the invoice

        Returns:
            Invoice ID

        Raises:
            ValidationError: If the client or items are missing, the due date
                precedes the invoice date, or the number is already used
            InvalidNumericInputError: If a quantity or price is negative
        """
        if not client_name or not client_name.strip():
            raise ValidationError("Client name is required")
        items = tuple(items)
        if not items:
            raise ValidationError("An invoice needs at least one item")

        invoice_date = invoice_date or date.today()
        due_date = due_date or invoice_date + timedelta(days=DEFAULT_PAYMENT_TERMS_DAYS)
        if due_date < invoice_date:
            raise ValidationError(f"Due date {due_date} is before invoice date {invoice_date}")

        if invoice_number is None:
            invoice_number = next_invoice_number(inv.invoice_number for inv in self.db.list_invoices())
        elif self.db.get_invoice_by_number(invoice_number) is not None:
            raise ValidationError(f"Invoice number '{invoice_number}' already exists")

        totals = compute_invoice_totals(items, self.hst_rate)
        invoice_id = self.db.create_invoice(
            invoice_number=invoice_number,
            client_name=client_name.strip(),
            invoice_date=invoice_date,
            due_date=due_date,
            items=items,
            subtotal=totals.subtotal,
            hst_amount=totals.hst_amount,
            total_amount=totals.total,
            status=InvoiceStatus.DRAFT,
            client_email=client_email.strip(),
            client_address=client_address.strip(),
            notes=notes,
        )
        logger.info(
            "invoice_created",
            invoice_id=invoice_id,
            invoice_number=invoice_number,
            total=str(totals.total),
        )
        return invoice_id

    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        return self.db.get_invoice(invoice_id)

    def list_invoices(self, status: Optional[InvoiceStatus] = None) -> list[Invoice]:
        return self.db.list_invoices(status=status)

    def set_status(self, invoice_id: int, status: InvoiceStatus) -> None:
        """Mark an invoice as draft, sent or paid.

        Raises:
            NotFoundError: If the invoice doesn't exist
        """
        status = InvoiceStatus(status)
        if self.db.get_invoice(invoice_id) is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        self.db.update_invoice_status(invoice_id, status)
        logger.info("invoice_status_changed", invoice_id=invoice_id, status=status.value)
