"""Amount parsing and numeric validation utilities."""

from decimal import Decimal, InvalidOperation
import re

from ledgerbook.domain.errors import (
    InvalidNumericInputError,
    negative_value,
    non_finite_value,
)


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        InvalidNumericInputError: If amount string cannot be parsed or is not finite
    """
    if not amount_str or not amount_str.strip():
        raise InvalidNumericInputError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    # "-$12" leaves "-12" after stripping the symbol
    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise InvalidNumericInputError(f"Could not parse amount '{amount_str}'")

    amount = to_decimal(amount, "amount")
    return -amount if is_negative else amount


def to_decimal(value, field_name: str, non_negative: bool = False) -> Decimal:
    """Coerce a numeric value to Decimal and validate it.

    Floats are converted through ``str`` so that 0.1 stays 0.1.

    Args:
        value: int, float, str or Decimal
        field_name: Name used in error messages
        non_negative: If True, reject values below zero

    Returns:
        Decimal value

    Raises:
        InvalidNumericInputError: If value is not a finite number, or is
            negative when ``non_negative`` is set
    """
    if isinstance(value, bool):
        raise InvalidNumericInputError(non_finite_value(field_name, value))

    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise InvalidNumericInputError(non_finite_value(field_name, value))

    if not result.is_finite():
        raise InvalidNumericInputError(non_finite_value(field_name, value))
    if non_negative and result < 0:
        raise InvalidNumericInputError(negative_value(field_name, result))
    return result
