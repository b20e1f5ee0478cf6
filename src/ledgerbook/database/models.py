"""SQLAlchemy models for ledgerbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Property(Base):
    """Rental property model."""

    __tablename__ = "properties"

    id = Column(Integer, primary_key=True)
    address = Column(String, nullable=False)
    purchase_price = Column(Numeric(14, 2), nullable=False)
    current_value = Column(Numeric(14, 2), nullable=False)
    cca_class = Column(String, nullable=False, default="1")
    opening_ucc = Column(Numeric(14, 2), nullable=False, default=0)
    additions = Column(Numeric(14, 2), nullable=False, default=0)
    tenant_name = Column(String, nullable=False, default="Vacant")
    lease_end = Column(Date, nullable=True)
    mortgage_balance = Column(Numeric(14, 2), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="property")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    vendor = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    ledger_type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    tax_form = Column(String, nullable=True)
    status = Column(String, nullable=False, default="posted")
    is_split = Column(Boolean, default=False, nullable=False)
    hst_included = Column(Boolean, default=False, nullable=False)
    hst_amount = Column(Numeric(12, 2), default=0, nullable=False)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    property = relationship("Property", back_populates="transactions")


class BudgetCategory(Base):
    """Monthly budget definition model. Spend is never stored."""

    __tablename__ = "budget_categories"

    id = Column(Integer, primary_key=True)
    category = Column(String, nullable=False)
    ledger_type = Column(String, nullable=False)
    limit = Column(Numeric(12, 2), nullable=False)
    savings_goal = Column(Numeric(12, 2), nullable=True)

    __table_args__ = (
        UniqueConstraint("ledger_type", "category", name="uq_budget_ledger_category"),
    )


class JournalEntry(Base):
    """Journal entry header model."""

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    reference_id = Column(Integer, ForeignKey("transactions.id"), nullable=True)
    status = Column(String, nullable=False, default="posted")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    lines = relationship(
        "LedgerLine",
        back_populates="journal_entry",
        cascade="all, delete-orphan",
        order_by="LedgerLine.id",
    )


class LedgerLine(Base):
    """Ledger line model."""

    __tablename__ = "ledger_lines"

    id = Column(Integer, primary_key=True)
    journal_entry_id = Column(Integer, ForeignKey("journal_entries.id"), nullable=False)
    account_code = Column(String, nullable=False)
    account_name = Column(String, nullable=False)
    debit = Column(Numeric(12, 2), nullable=False, default=0)
    credit = Column(Numeric(12, 2), nullable=False, default=0)

    # Relationships
    journal_entry = relationship("JournalEntry", back_populates="lines")


class MileageLog(Base):
    """Business trip log model."""

    __tablename__ = "mileage_logs"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    distance_km = Column(Numeric(10, 2), nullable=False)
    purpose = Column(String, nullable=False, default="")
    start_location = Column(String, nullable=False, default="")
    end_location = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Invoice(Base):
    """Invoice header model. Totals are stored as computed at save time."""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    invoice_number = Column(String, nullable=False, unique=True)
    client_name = Column(String, nullable=False)
    client_email = Column(String, nullable=False, default="")
    client_address = Column(String, nullable=False, default="")
    invoice_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String, nullable=False, default="draft")
    notes = Column(String, nullable=False, default="")
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    hst_amount = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.id",
    )


class InvoiceItem(Base):
    """Invoice line item model."""

    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    description = Column(String, nullable=False)
    quantity = Column(Numeric(10, 2), nullable=False, default=1)
    price = Column(Numeric(12, 2), nullable=False, default=0)

    # Relationships
    invoice = relationship("Invoice", back_populates="items")

def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
