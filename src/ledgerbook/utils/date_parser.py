"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and the
    relative forms "today", "yesterday", "tomorrow", and "this/last/next
    month" (first day of that month).

    Args:
        date_str: Date string in various formats
        today: Reference date for relative forms (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "next month": (today + relativedelta(months=1)).replace(day=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str | None, today: date | None = None) -> tuple[int, int]:
    """Parse a month specifier into a ``(month, year)`` pair.

    Accepts "YYYY-MM", any date string understood by :func:`parse_date`, or
    None for the month containing ``today``.

    Raises:
        ValueError: If the specifier cannot be parsed
    """
    today = today or date.today()
    if month_str is None or not month_str.strip():
        return today.month, today.year

    text = month_str.strip()
    parts = text.split("-")
    if len(parts) == 2 and all(part.isdigit() for part in parts):
        year, month = int(parts[0]), int(parts[1])
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month '{month_str}'")
        return month, year

    parsed = parse_date(text, today=today)
    return parsed.month, parsed.year


def month_bounds(month: int, year: int) -> tuple[date, date]:
    """Return the first and last day of a calendar month."""
    start = date(year, month, 1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return start, end
