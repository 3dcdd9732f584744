"""Date parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_DAYS_AGO = re.compile(r"^(\d+)\s+(day|days|jour|jours)\s+ago$")

RELATIVE_DATES = {
    "today": 0,
    "aujourd'hui": 0,
    "yesterday": -1,
    "hier": -1,
    "tomorrow": 1,
    "demain": 1,
}


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    ISO dates ("2026-02-25") are read as year-month-day; slash and dot
    dates ("25/02/2026") are read day first, as printed on receipts.
    Relative forms "today", "yesterday", "tomorrow" (or their French
    equivalents) and "N days ago" are also accepted.

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    if date_str is None or not date_str.strip():
        raise ValueError("Empty date string")

    text = date_str.strip().lower()
    today = date.today()

    if text in RELATIVE_DATES:
        return today + timedelta(days=RELATIVE_DATES[text])

    match = _DAYS_AGO.match(text)
    if match:
        return today - timedelta(days=int(match.group(1)))

    iso = re.match(r"^\d{4}-\d{1,2}-\d{1,2}$", text) is not None
    try:
        return date_parser.parse(text, dayfirst=not iso, yearfirst=iso).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-month, last-month, this-year, last-year

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return today.replace(day=1), today
    if period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        return start_date, today.replace(day=1) - timedelta(days=1)
    if period == "this-year":
        return today.replace(month=1, day=1), today
    if period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        return start_date, today.replace(month=1, day=1) - timedelta(days=1)

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: this-month, last-month, this-year, last-year"
    )
