"""Date helpers for log records."""

from datetime import date, datetime
from typing import Any


def parse_date(value: Any) -> date | None:
    """Parse an ISO date (or datetime) into a date; None when unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def days_between(start: Any, end: Any) -> int:
    """Inclusive day count from start to end; 0 when invalid or reversed."""
    start_date, end_date = parse_date(start), parse_date(end)
    if start_date is None or end_date is None:
        return 0
    days = (end_date - start_date).days + 1
    return days if days > 0 else 0


def year_of(value: Any) -> int | None:
    parsed = parse_date(value)
    return parsed.year if parsed else None
