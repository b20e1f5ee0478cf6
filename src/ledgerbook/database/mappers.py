"""Mapper functions to convert between domain models and SQLAlchemy models.

Enum fields are stored as their string values and restored here.
"""

from decimal import Decimal

from ledgerbook.domain import entities as domain
from ledgerbook.database.models import (
    BudgetCategory as ORMBudgetCategory,
    Invoice as ORMInvoice,
    JournalEntry as ORMJournalEntry,
    LedgerLine as ORMLedgerLine,
    MileageLog as ORMMileageLog,
    Property as ORMProperty,
    Transaction as ORMTransaction,
)


def _money(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        vendor=orm_transaction.vendor,
        amount=_money(orm_transaction.amount),
        ledger_type=domain.LedgerType(orm_transaction.ledger_type),
        category=orm_transaction.category,
        tax_form=domain.TaxForm(orm_transaction.tax_form) if orm_transaction.tax_form else None,
        status=domain.TransactionStatus(orm_transaction.status),
        is_split=bool(orm_transaction.is_split),
        hst_included=bool(orm_transaction.hst_included),
        hst_amount=_money(orm_transaction.hst_amount),
        property_id=orm_transaction.property_id,
    )


def property_to_domain(orm_property: ORMProperty) -> domain.Property:
    """Convert SQLAlchemy Property model to domain Property entity."""
    return domain.Property(
        id=orm_property.id,
        address=orm_property.address,
        purchase_price=_money(orm_property.purchase_price),
        current_value=_money(orm_property.current_value),
        cca_class=orm_property.cca_class,
        opening_ucc=_money(orm_property.opening_ucc),
        additions=_money(orm_property.additions),
        tenant_name=orm_property.tenant_name,
        lease_end=orm_property.lease_end,
        mortgage_balance=(
            _money(orm_property.mortgage_balance)
            if orm_property.mortgage_balance is not None
            else None
        ),
    )


def budget_to_domain(orm_budget: ORMBudgetCategory) -> domain.BudgetCategory:
    """Convert SQLAlchemy BudgetCategory model to domain BudgetCategory entity."""
    return domain.BudgetCategory(
        id=orm_budget.id,
        category=orm_budget.category,
        ledger_type=domain.LedgerType(orm_budget.ledger_type),
        limit=_money(orm_budget.limit),
        savings_goal=(
            _money(orm_budget.savings_goal) if orm_budget.savings_goal is not None else None
        ),
    )


def ledger_line_to_domain(orm_line: ORMLedgerLine) -> domain.LedgerLine:
    """Convert SQLAlchemy LedgerLine model to domain LedgerLine entity."""
    return domain.LedgerLine(
        account_code=orm_line.account_code,
        account_name=orm_line.account_name,
        debit=_money(orm_line.debit),
        credit=_money(orm_line.credit),
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntryPayload:
    """Convert SQLAlchemy JournalEntry model (with lines) to a domain payload."""
    return domain.JournalEntryPayload(
        entry=domain.JournalEntry(
            date=orm_entry.date,
            description=orm_entry.description,
            reference_id=orm_entry.reference_id,
            status=domain.JournalStatus(orm_entry.status),
        ),
        lines=tuple(ledger_line_to_domain(line) for line in orm_entry.lines),
    )


def mileage_log_to_domain(orm_log: ORMMileageLog) -> domain.MileageLog:
    """Convert SQLAlchemy MileageLog model to domain MileageLog entity."""
    return domain.MileageLog(
        id=orm_log.id,
        date=orm_log.date,
        distance_km=_money(orm_log.distance_km),
        purpose=orm_log.purpose,
        start_location=orm_log.start_location,
        end_location=orm_log.end_location,
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model (with items) to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        invoice_number=orm_invoice.invoice_number,
        client_name=orm_invoice.client_name,
        invoice_date=orm_invoice.invoice_date,
        due_date=orm_invoice.due_date,
        items=tuple(
            domain.InvoiceItem(
                description=item.description,
                quantity=_money(item.quantity),
                price=_money(item.price),
            )
            for item in orm_invoice.items
        ),
        subtotal=_money(orm_invoice.subtotal),
        hst_amount=_money(orm_invoice.hst_amount),
        total_amount=_money(orm_invoice.total_amount),
        status=domain.InvoiceStatus(orm_invoice.status),
        client_email=orm_invoice.client_email,
        client_address=orm_invoice.client_address,
        notes=orm_invoice.notes,
    )
