"""Utility functions for ledgerbook."""

from ledgerbook.utils.date_parser import parse_date, parse_month, month_bounds
from ledgerbook.utils.amount_parser import parse_amount, to_decimal

__all__ = ["parse_date", "parse_month", "month_bounds", "parse_amount", "to_decimal"]
