from datetime import datetime, timezone
from typing import Any, Optional


def parse_datetime(dt_str: Any) -> Optional[datetime]:
    """Parse a backend timestamp.

    The backend sends either an ISO string or a document-store timestamp
    (``{"_seconds": ..., "_nanoseconds": ...}``).

    Args:
        dt_str: Timestamp to parse

    Returns:
        Parsed datetime object, or None when the value can't be read
    """
    if not dt_str:
        return None

    if isinstance(dt_str, datetime):
        return dt_str

    if isinstance(dt_str, dict):
        seconds = dt_str.get("_seconds", dt_str.get("seconds"))
        if seconds is None:
            return None
        nanos = dt_str.get("_nanoseconds", dt_str.get("nanoseconds")) or 0
        try:
            return datetime.fromtimestamp(seconds + nanos / 1e9, tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError):
            return None

    if not isinstance(dt_str, str):
        return None

    if "Z" in dt_str:
        dt_str = dt_str.replace("Z", "+00:00")

    try:
        return datetime.fromisoformat(dt_str)
    except ValueError:
        return None


def format_date(value: Any) -> str:
    """Short date (MM/DD/YYYY) for a backend timestamp."""
    parsed = parse_datetime(value)
    if parsed is None:
        return "Invalid date"
    return parsed.strftime("%m/%d/%Y")


def format_price(value: Any) -> str:
    try:
        return f"${float(value):.2f}"
    except (TypeError, ValueError):
        return "$0.00"


def format_rating(value: Any) -> str:
    try:
        return f"{float(value):.1f}"
    except (TypeError, ValueError):
        return "0.0"


def average(values) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)
