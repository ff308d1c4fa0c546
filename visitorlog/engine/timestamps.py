"""
Timestamp parsing and wall-clock rendering for visitor check-in times
"""
from datetime import date, datetime, time, tzinfo
from typing import Any, Optional

import pytz

PLACEHOLDER = "-"


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Display timezone by name, None means the server's local time"""
    if not name:
        return None
    return pytz.timezone(name)


def _aware(dt: datetime, tz: Optional[tzinfo] = None) -> datetime:
    # Naive values are wall-clock time in the display timezone
    if dt.tzinfo is not None:
        return dt
    if tz is None:
        return dt.astimezone()
    if hasattr(tz, "localize"):
        return tz.localize(dt)
    return dt.replace(tzinfo=tz)


def parse_in_time(value: Any, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse a stored in_time into an aware datetime, None when invalid"""
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    try:
        return _aware(dt, tz)
    except (OverflowError, OSError, ValueError):
        return None


def parse_range_bound(value: Optional[str], end_of_day: bool = False,
                      tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """
    Parse a date range bound from user input.

    A bare date (YYYY-MM-DD) covers the whole day: the lower bound starts at
    midnight and the upper bound ends at the last microsecond of the day.
    Raises ValueError for unparseable input.
    """
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    if len(text) == 10:
        day = date.fromisoformat(text)
        dt = datetime.combine(day, time.max if end_of_day else time.min)
    else:
        dt = datetime.fromisoformat(text)
    return _aware(dt, tz)


def split_in_time(value: Any, tz: Optional[tzinfo] = None) -> tuple[str, str]:
    """(DD-MM-YYYY, HH:MM:SS) in the display timezone, ('-', '-') when unparseable"""
    dt = parse_in_time(value, tz)
    if dt is None:
        return PLACEHOLDER, PLACEHOLDER
    try:
        local = dt.astimezone() if tz is None else dt.astimezone(tz)
    except (OverflowError, OSError, ValueError):
        return PLACEHOLDER, PLACEHOLDER
    return local.strftime("%d-%m-%Y"), local.strftime("%H:%M:%S")


def sort_timestamp(value: Any, tz: Optional[tzinfo] = None) -> float:
    """Numeric sort value, unparseable times sort as the earliest instant"""
    dt = parse_in_time(value, tz)
    if dt is None:
        return float("-inf")
    try:
        return dt.timestamp()
    except (OverflowError, OSError, ValueError):
        return float("-inf")
