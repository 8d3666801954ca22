"""Date coercion helpers shared by the schema models and the date rule."""

from datetime import date, datetime, time, timezone
from typing import Any


def is_date_like(value: Any) -> bool:
    """Return True for native date values (``datetime`` and ``date``)."""
    return isinstance(value, (datetime, date))


def to_instant(value: Any) -> datetime:
    """Convert an ISO-8601 string or a date-like value to an aware UTC datetime.

    Naive values are taken to be UTC. A bare ``date`` becomes midnight UTC.

    Raises:
        ValueError: If the value is not a string or date-like, or the string
            is not ISO-8601.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    else:
        raise ValueError(f"Expected ISO-8601 string or date, got {type(value).__name__}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
