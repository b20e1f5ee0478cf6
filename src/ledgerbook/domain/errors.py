"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class InvalidNumericInputError(ValidationError):
    """A monetary or quantity input is non-finite or violates its sign."""


class UnbalancedJournalEntryError(DomainError):
    """Generated debits and credits do not balance.

    This signals a defect in account resolution or tax decomposition and is
    never corrected silently.
    """

    def __init__(self, total_debit: Decimal, total_credit: Decimal):
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(
            f"Unbalanced journal entry: debit {total_debit} != credit {total_credit}"
        )


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def property_not_found(property_id: int) -> str:
    """Return message for missing property."""
    return f"Property {property_id} not found"


def non_finite_value(field_name: str, value) -> str:
    """Return message for NaN or infinite numeric input."""
    return f"{field_name} must be a finite number, got {value!r}"


def negative_value(field_name: str, value) -> str:
    """Return message for a negative value where non-negative is required."""
    return f"{field_name} must not be negative, got {value}"


def invoice_not_found(invoice_id: int) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"
