"""
Centralized date utilities
All date operations should use functions from this module
"""

from datetime import date, datetime
from typing import Optional
from taskflow.config.constants import DATE_FORMAT


def get_current_date() -> date:
    """
    Get today's local date

    Returns:
        Current date
    """
    return datetime.now().date()


def get_current_date_str() -> str:
    """
    Get today's date string (YYYY-MM-DD)

    Returns:
        Current date as string in format YYYY-MM-DD
    """
    return format_date(get_current_date())


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_date_str(value: Optional[str]) -> Optional[date]:
    """
    Parse a stored YYYY-MM-DD date

    Template placeholders ("{{DATE}}") and malformed values give None.
    A full ISO timestamp is accepted and truncated to its day.

    Args:
        value: Stored date string

    Returns:
        Parsed date or None
    """
    if not value or "{{" in value:
        return None
    try:
        return datetime.strptime(value[:10], DATE_FORMAT).date()
    except ValueError:
        return None


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative if end is earlier)"""
    return (end - start).days
