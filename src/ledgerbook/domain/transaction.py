"""Transaction domain service."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

import structlog

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import (
    DraftTransaction,
    JournalEntryPayload,
    LedgerType,
    PaymentMethod,
    TaxForm,
    Transaction as TransactionEntity,
    TransactionStatus,
)
from ledgerbook.domain.errors import (
    NotFoundError,
    ValidationError,
    property_not_found,
    transaction_not_found,
)
from ledgerbook.domain.imports import draft_to_transaction
from ledgerbook.domain.journal import DEFAULT_GENERATOR, JournalEntryGenerator
from ledgerbook.domain.tax import HST_RATE, allocate_split, decompose_tax
from ledgerbook.domain.tax_lines import LEDGER_TAX_FORMS
from ledgerbook.utils.amount_parser import to_decimal

logger = structlog.get_logger(__name__)


class TransactionService:
    """Service for capturing, reviewing and posting transactions."""

    def __init__(
        self,
        db: Database,
        hst_rate: Decimal = HST_RATE,
        generator: JournalEntryGenerator = DEFAULT_GENERATOR,
    ):
        """Initialize transaction service.

        Args:
            db: Database instance
            hst_rate: Rate used to derive embedded HST
            generator: Journal entry generator used when posting
        """
        self.db = db
        self.hst_rate = to_decimal(hst_rate, "hst_rate", non_negative=True)
        self.generator = generator

    def _require_transaction(self, transaction_id: int) -> TransactionEntity:
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def _check_property(self, ledger_type: LedgerType, property_id: Optional[int]) -> None:
        if property_id is None:
            return
        if ledger_type != LedgerType.PASSIVE:
            raise ValidationError("Only passive ledger transactions can reference a property")
        if self.db.get_property(property_id) is None:
            raise NotFoundError(property_not_found(property_id))

    def create_transaction(
        self,
        date: date,
        vendor: str,
        amount,
        ledger_type: LedgerType,
        category: str,
        tax_form: Optional[TaxForm] = None,
        status: TransactionStatus = TransactionStatus.POSTED,
        is_split: bool = False,
        hst_included: bool = False,
        property_id: Optional[int] = None,
        payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
    ) -> int:
        """Create a transaction and, when posted, its journal entry.

        HST is derived from the amount when ``hst_included`` is set. The
        journal entry is generated before anything is stored, so an invalid
        or unbalanced posting leaves the store untouched.

        Args:
            date: Transaction date
            vendor: Vendor or payer
            amount: Signed amount (negative for outflows)
            ledger_type: Ledger the transaction belongs to
            category: Free-text category
            tax_form: Tax form; defaults from the ledger
            status: posted or pending; pending items are not journalled yet
            is_split: Amount was apportioned from a larger document
            hst_included: Amount includes HST
            property_id: Property for passive ledger items
            payment_method: Credited account for outflows

        Returns:
            Transaction ID

        Raises:
            ValidationError: If vendor is empty or the property does not apply
            NotFoundError: If the property does not exist
            InvalidNumericInputError: If the amount is not finite
        """
        if not vendor or not vendor.strip():
            raise ValidationError("Vendor is required")
        ledger_type = LedgerType(ledger_type)
        status = TransactionStatus(status)
        amount = to_decimal(amount, "amount")
        self._check_property(ledger_type, property_id)

        txn = TransactionEntity(
            id=0,
            date=date,
            vendor=vendor.strip(),
            amount=amount,
            ledger_type=ledger_type,
            category=category.strip(),
            tax_form=TaxForm(tax_form) if tax_form else LEDGER_TAX_FORMS.get(ledger_type),
            status=status,
            is_split=is_split,
            hst_included=hst_included,
            hst_amount=decompose_tax(amount, hst_included, self.hst_rate),
            property_id=property_id,
        )

        payload = None
        if status == TransactionStatus.POSTED:
            payload = self.generator.generate(txn, payment_method)

        transaction_id = self._store(txn)
        if payload is not None:
            self._store_journal(payload, transaction_id)

        logger.info(
            "transaction_created",
            transaction_id=transaction_id,
            ledger_type=ledger_type.value,
            status=status.value,
        )
        return transaction_id

    def _store(self, txn: TransactionEntity) -> int:
        return self.db.create_transaction(
            date=txn.date,
            vendor=txn.vendor,
            amount=txn.amount,
            ledger_type=txn.ledger_type,
            category=txn.category,
            tax_form=txn.tax_form,
            status=txn.status,
            is_split=txn.is_split,
            hst_included=txn.hst_included,
            hst_amount=txn.hst_amount,
            property_id=txn.property_id,
        )

    def _store_journal(self, payload: JournalEntryPayload, transaction_id: int) -> int:
        entry = replace(payload.entry, reference_id=transaction_id)
        return self.db.create_journal_entry(replace(payload, entry=entry))

    def capture(
        self,
        date: date,
        vendor: str,
        gross_amount,
        category: str,
        active_percent=100,
        hst_included: bool = True,
        payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
        property_id: Optional[int] = None,
    ) -> int:
        """Quick-capture an expense shared between the active and passive ledgers.

        The transaction is recorded in the ledger holding the larger share
        and flagged as split when both ledgers take part. ``property_id`` is
        only attached when that ledger is passive.

        Returns:
            Transaction ID
        """
        allocation = allocate_split(gross_amount, hst_included, active_percent, self.hst_rate)
        return self.create_transaction(
            date=date,
            vendor=vendor,
            amount=-allocation.gross,
            ledger_type=allocation.primary_ledger,
            category=category,
            is_split=allocation.is_split,
            hst_included=hst_included,
            property_id=property_id if allocation.primary_ledger == LedgerType.PASSIVE else None,
            payment_method=payment_method,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        ledger_type: Optional[LedgerType] = None,
        status: Optional[TransactionStatus] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters."""
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            ledger_type=ledger_type,
            status=status,
        )

    def update_transaction(
        self,
        transaction_id: int,
        vendor: Optional[str] = None,
        amount=None,
        category: Optional[str] = None,
        hst_included: Optional[bool] = None,
        property_id: Optional[int] = None,
    ) -> None:
        """Edit a transaction, re-deriving its HST amount.

        Posted journal entries are immutable and are not rewritten.

        Raises:
            NotFoundError: If the transaction or property doesn't exist
        """
        txn = self._require_transaction(transaction_id)
        changes: dict = {}
        if vendor is not None:
            changes["vendor"] = vendor.strip()
        if category is not None:
            changes["category"] = category.strip()
        if property_id is not None:
            self._check_property(txn.ledger_type, property_id)
            changes["property_id"] = property_id

        new_amount = to_decimal(amount, "amount") if amount is not None else txn.amount
        new_included = txn.hst_included if hst_included is None else hst_included
        if amount is not None:
            changes["amount"] = new_amount
        if hst_included is not None:
            changes["hst_included"] = new_included
        changes["hst_amount"] = decompose_tax(new_amount, new_included, self.hst_rate)

        self.db.update_transaction(transaction_id, **changes)

    def approve_transaction(
        self,
        transaction_id: int,
        payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
    ) -> JournalEntryPayload:
        """Post a pending transaction and store its journal entry.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If it is already posted
        """
        txn = self._require_transaction(transaction_id)
        if not txn.is_pending:
            raise ValidationError(f"Transaction {transaction_id} is already posted")

        payload = self.generator.generate(txn, payment_method)
        entry = replace(payload.entry, reference_id=transaction_id)
        self.db.post_transaction(transaction_id, replace(payload, entry=entry))
        logger.info("transaction_approved", transaction_id=transaction_id)
        return payload

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction together with its journal entries.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self._require_transaction(transaction_id)
        self.db.delete_transaction(transaction_id)

    def get_journal_entries(self, transaction_id: int) -> list[JournalEntryPayload]:
        """Get stored journal entries for a transaction."""
        self._require_transaction(transaction_id)
        return self.db.list_journal_entries(reference_id=transaction_id)

    def import_drafts(
        self,
        drafts: Iterable[DraftTransaction],
        ledger_type: LedgerType,
        property_id: Optional[int] = None,
    ) -> list[int]:
        """Store parsed document drafts as pending transactions.

        Returns:
            IDs of the created transactions
        """
        ledger_type = LedgerType(ledger_type)
        self._check_property(ledger_type, property_id)

        ids = []
        for draft in drafts:
            txn = draft_to_transaction(draft, ledger_type, property_id, self.hst_rate)
            ids.append(self._store(txn))
        logger.info("drafts_imported", count=len(ids), ledger_type=ledger_type.value)
        return ids
