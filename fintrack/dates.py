"""Date utilities for fintrack.

Pure functions for date windows and ordering.
"""

from datetime import date, timedelta

DATE_FORMAT = "%Y-%m-%d"


def date_key(value: str) -> tuple[int, int, int]:
    """Split a YYYY-MM-DD string into a comparable (year, month, day) tuple.

    Day-of-month is not checked against the calendar, so "2025-02-31" still
    orders between "2025-02-28" and "2025-03-01".

    Args:
        value: Date string in YYYY-MM-DD format.

    Returns:
        Tuple of (year, month, day).

    Raises:
        ValueError: If the value is not three dash-separated integers.
    """
    year, month, day = value.split("-")
    return int(year), int(month), int(day)


def safe_date_key(value: str) -> tuple[int, int, int]:
    """Like date_key, but unparseable dates sort before every real date."""
    try:
        return date_key(value)
    except ValueError:
        return (0, 0, 0)


def shift_years(day: date, years: int) -> date:
    """Move a date by whole years, clamping Feb 29 to Feb 28 when needed.

    Args:
        day: Starting date.
        years: Number of years to add (negative to subtract).

    Returns:
        Shifted date.
    """
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


def allowed_date_window(today: date) -> tuple[date, date]:
    """Calculate the inclusive range of acceptable transaction dates.

    Args:
        today: The current date.

    Returns:
        Tuple of (earliest, latest): ten years back and one year ahead.
    """
    return shift_years(today, -10), shift_years(today, 1)


def trailing_window(today: date, days: int = 7) -> tuple[str, str]:
    """Calculate the inclusive date range covering the last `days` calendar days.

    Args:
        today: The current date (last day of the window).
        days: Window length including today.

    Returns:
        Tuple of (since_date, until_date) in YYYY-MM-DD format.
    """
    since = today - timedelta(days=days - 1)
    return since.strftime(DATE_FORMAT), today.strftime(DATE_FORMAT)
