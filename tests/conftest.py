"""Shared pytest fixtures for ledgerbook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.budget_service import BudgetService
from ledgerbook.domain.entities import LedgerType, Transaction, TransactionStatus
from ledgerbook.domain.invoice import InvoiceService
from ledgerbook.domain.mileage import MileageService
from ledgerbook.domain.property import PropertyService
from ledgerbook.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def property_service(temp_db):
    """Create a PropertyService with a temporary database."""
    return PropertyService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def mileage_service(temp_db):
    """Create a MileageService with a temporary database."""
    return MileageService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def sample_property(property_service):
    """Create a sample rental property."""
    property_id = property_service.create_property(
        address="12 Elm Street",
        purchase_price=Decimal("800000"),
        current_value=Decimal("850000"),
        cca_class="1",
        opening_ucc=Decimal("780000"),
        additions=Decimal("20000"),
        tenant_name="J. Smith",
        lease_end=date(2024, 4, 30),
        mortgage_balance=Decimal("450000"),
    )
    return property_service.get_property(property_id)


@pytest.fixture
def make_transaction():
    """Build Transaction entities with sensible defaults."""

    def _make(
        amount,
        category="Meals",
        ledger_type=LedgerType.ACTIVE,
        txn_date=date(2024, 3, 10),
        id=1,
        vendor="Vendor",
        status=TransactionStatus.POSTED,
        hst_amount=Decimal("0"),
        hst_included=False,
        **kwargs,
    ):
        return Transaction(
            id=id,
            date=txn_date,
            vendor=vendor,
            amount=Decimal(str(amount)),
            ledger_type=ledger_type,
            category=category,
            status=status,
            hst_included=hst_included,
            hst_amount=Decimal(str(hst_amount)),
            **kwargs,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
