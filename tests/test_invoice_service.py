"""Tests for InvoiceService."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerbook.domain.entities import InvoiceItem, InvoiceStatus
from ledgerbook.domain.errors import (
    InvalidNumericInputError,
    NotFoundError,
    ValidationError,
)
from ledgerbook.domain.invoice import DEFAULT_NOTES, InvoiceService, next_invoice_number

ITEMS = [
    InvoiceItem("Listing consultation", Decimal("2"), Decimal("150")),
    InvoiceItem("Staging", Decimal("1"), Decimal("200.50")),
]


def test_create_invoice_computes_and_stores_totals(invoice_service):
    invoice_id = invoice_service.create_invoice(
        client_name=" Acme Realty ",
        items=ITEMS,
        invoice_date=date(2024, 3, 1),
        client_email="ap@acme.test",
    )

    invoice = invoice_service.get_invoice(invoice_id)
    assert invoice.invoice_number == "0001"
    assert invoice.client_name == "Acme Realty"
    assert invoice.status == InvoiceStatus.DRAFT
    assert invoice.due_date == date(2024, 3, 31)
    assert invoice.subtotal == Decimal("500.50")
    assert invoice.hst_amount == Decimal("65.07")
    assert invoice.total_amount == Decimal("565.57")
    assert [item.description for item in invoice.items] == ["Listing consultation", "Staging"]
    assert invoice.items[1].price == Decimal("200.50")
    assert invoice.notes == DEFAULT_NOTES


def test_invoice_rate_is_injectable(temp_db):
    service = InvoiceService(temp_db, hst_rate=Decimal("0.05"))
    invoice_id = service.create_invoice("Acme", [InvoiceItem("Fee", Decimal("1"), Decimal("100"))])

    invoice = service.get_invoice(invoice_id)
    assert invoice.hst_amount == Decimal("5.00")
    assert invoice.total_amount == Decimal("105.00")


def test_invoice_numbers_continue_the_sequence(invoice_service):
    first = invoice_service.create_invoice("A", ITEMS, invoice_date=date(2024, 3, 1))
    invoice_service.create_invoice("B", ITEMS, invoice_date=date(2024, 3, 2), invoice_number="0041")
    third = invoice_service.create_invoice("C", ITEMS, invoice_date=date(2024, 3, 3))

    assert invoice_service.get_invoice(first).invoice_number == "0001"
    assert invoice_service.get_invoice(third).invoice_number == "0042"


def test_next_invoice_number_ignores_non_numeric():
    assert next_invoice_number([]) == "0001"
    assert next_invoice_number(["0007", "INV-9", "0003"]) == "0008"


def test_duplicate_invoice_number_rejected(invoice_service):
    invoice_service.create_invoice("A", ITEMS, invoice_number="0100")
    with pytest.raises(ValidationError, match="already exists"):
        invoice_service.create_invoice("B", ITEMS, invoice_number="0100")


@pytest.mark.parametrize(
    "kwargs,error",
    [
        ({"client_name": "  ", "items": ITEMS}, ValidationError),
        ({"client_name": "Acme", "items": []}, ValidationError),
        (
            {
                "client_name": "Acme",
                "items": ITEMS,
                "invoice_date": date(2024, 3, 10),
                "due_date": date(2024, 3, 1),
            },
            ValidationError,
        ),
        (
            {"client_name": "Acme", "items": [InvoiceItem("Refund", Decimal("1"), Decimal("-5"))]},
            InvalidNumericInputError,
        ),
    ],
)
def test_create_invoice_validation(invoice_service, kwargs, error):
    with pytest.raises(error):
        invoice_service.create_invoice(**kwargs)
    assert invoice_service.list_invoices() == []


def test_set_status_and_filter(invoice_service):
    first = invoice_service.create_invoice("A", ITEMS, invoice_date=date(2024, 3, 1))
    second = invoice_service.create_invoice("B", ITEMS, invoice_date=date(2024, 2, 1))

    invoice_service.set_status(first, InvoiceStatus.PAID)

    assert [inv.id for inv in invoice_service.list_invoices()] == [second, first]
    assert [inv.id for inv in invoice_service.list_invoices(InvoiceStatus.PAID)] == [first]
    assert [inv.id for inv in invoice_service.list_invoices(InvoiceStatus.DRAFT)] == [second]


def test_set_status_missing_invoice(invoice_service):
    with pytest.raises(NotFoundError):
        invoice_service.set_status(999, InvoiceStatus.SENT)


def test_is_overdue(invoice_service):
    invoice_id = invoice_service.create_invoice(
        "A", ITEMS, invoice_date=date(2024, 3, 1), due_date=date(2024, 3, 15)
    )
    invoice = invoice_service.get_invoice(invoice_id)
    assert not invoice.is_overdue(date(2024, 3, 15))
    assert invoice.is_overdue(date(2024, 3, 16))

    invoice_service.set_status(invoice_id, InvoiceStatus.PAID)
    assert not invoice_service.get_invoice(invoice_id).is_overdue(date(2024, 4, 1))
