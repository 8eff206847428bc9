"""
Date and time utilities for rail-rest.

Parsing helpers used by the date filter and day-boundary helpers that turn a
calendar date into the datetimes bounding it.
"""

from datetime import date, datetime, time
from typing import Any, Optional

from django.conf import settings
from django.utils import timezone


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 datetime string.

    Examples:
        >>> parse_iso_datetime("2024-01-15T10:30:00Z")
        datetime.datetime(2024, 1, 15, 10, 30, tzinfo=datetime.timezone.utc)
        >>> parse_iso_datetime("yesterday") is None
        True
    """
    if not value:
        return None
    try:
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a date from a date, a datetime or an ISO 8601 string.

    Returns:
        Parsed date or None if parsing fails.

    Examples:
        >>> parse_date("2024-01-15")
        datetime.date(2024, 1, 15)
        >>> parse_date("2024-01-15T10:30:00")
        datetime.date(2024, 1, 15)
        >>> parse_date("2024-02-30") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        parsed = parse_iso_datetime(text)
        return parsed.date() if parsed is not None else None


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min)


def end_of_day(value: date) -> datetime:
    return datetime.combine(value, time.max)


def make_aware_if_needed(value: datetime, enabled: bool = True) -> datetime:
    """
    Attach the current timezone to naive datetimes when ``USE_TZ`` is on.
    """
    if enabled and getattr(settings, "USE_TZ", False) and timezone.is_naive(value):
        return timezone.make_aware(value)
    return value
