"""Open/closed evaluation for restaurant business hours.

Hours come from the backend as one string per weekday, e.g.
``"Monday: 9:00 AM - 5:00 PM"`` or ``"Sunday: Closed"``.
"""

import re
from datetime import datetime, timedelta, time
from typing import List, Optional, Tuple

WEEKDAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

HOURS_RANGE_PATTERN = re.compile(
    r"(\d{1,2}):(\d{2})\s*([AP]M)\s*[–-]\s*(\d{1,2}):(\d{2})\s*([AP]M)",
    re.IGNORECASE,
)


def get_current_time() -> datetime:
    """Local wall-clock time truncated to the minute."""
    return datetime.now().replace(second=0, microsecond=0)


def to_24_hour(hours: int, minutes: int, period: str) -> time:
    """Convert a 12-hour clock reading to a time of day.

    12:xx AM is just after midnight and 12:xx PM is just after noon.
    """
    period = period.upper()
    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0
    return time(hours, minutes)


def _find_day_entry(hours: List[str], day: str) -> Optional[str]:
    for entry in hours:
        if isinstance(entry, str) and entry.strip().startswith(day):
            return entry
    return None


def _parse_range(entry: str) -> Optional[Tuple[time, time]]:
    match = HOURS_RANGE_PATTERN.search(entry)
    if not match:
        return None
    try:
        open_time = to_24_hour(int(match.group(1)), int(match.group(2)), match.group(3))
        close_time = to_24_hour(int(match.group(4)), int(match.group(5)), match.group(6))
    except ValueError:
        # hours or minutes out of range, e.g. "13:75 PM"
        return None
    return open_time, close_time


def _window_for(entry: Optional[str], day_start: datetime) -> Optional[Tuple[datetime, datetime]]:
    """Opening window of one day's entry, anchored on that day's midnight."""
    if not entry or "Closed" in entry:
        return None
    parsed = _parse_range(entry)
    if parsed is None:
        return None
    open_time, close_time = parsed
    opens_at = datetime.combine(day_start.date(), open_time)
    closes_at = datetime.combine(day_start.date(), close_time)
    if closes_at < opens_at:
        # range spans midnight
        closes_at += timedelta(days=1)
    return opens_at, closes_at


def is_business_open(hours: Optional[List[str]]) -> bool:
    """Whether a business is open right now.

    Today's entry decides, except that a range from yesterday spanning
    midnight also covers the early hours of today. Missing, "Closed" or
    malformed entries count as closed; this never raises.

    Args:
        hours: Per-day strings such as "Friday: 10:00 PM - 2:00 AM"

    Returns:
        True when the current minute falls inside an opening window, bounds included
    """
    if not hours:
        return False

    now = get_current_time()
    today = now.replace(hour=0, minute=0)
    yesterday = today - timedelta(days=1)

    windows = [
        _window_for(_find_day_entry(hours, WEEKDAY_NAMES[today.weekday()]), today),
        _window_for(_find_day_entry(hours, WEEKDAY_NAMES[yesterday.weekday()]), yesterday),
    ]
    return any(
        opens_at <= now <= closes_at
        for opens_at, closes_at in (w for w in windows if w is not None)
    )
