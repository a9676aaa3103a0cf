"""
Date and datetime helpers.

Weeks start on Monday throughout the application.
"""

from datetime import date, datetime, timedelta, timezone

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Replaces datetime.utcnow() which is deprecated in Python 3.12+.
    """
    return datetime.now(UTC)


def start_of_week(day: date) -> date:
    """
    Get the Monday of the week containing ``day``.

    Example:
        >>> start_of_week(date(2026, 10, 22))  # Thursday
        date(2026, 10, 19)
    """
    return day - timedelta(days=day.weekday())
