import re
from datetime import date, datetime, time, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo


def parse_day(value: Union[date, str]) -> date:
    """Return a calendar date for a date/datetime or an ISO 'YYYY-MM-DD' string.

    Strings are read as a plain local calendar date, no timezone shift.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # a trailing "T..." time part is ignored, anything else must be a plain date
        return date.fromisoformat(value.strip().split("T", 1)[0])
    raise ValueError(f"Not a date: {value!r}")


def format_hhmm(t: Union[time, datetime]) -> str:
    return f"{t.hour:02d}:{t.minute:02d}"


def normalize_time(text: str) -> Optional[str]:
    """Normalize a time phrase into 24-hour 'HH:MM'.

    Handles inputs like '9am', '9:30 AM', '14:00', '2 pm', etc.
    Returns None if no sensible time is found.
    """
    if not text:
        return None

    s = text.lower()

    # 12-hour with am/pm, e.g. '9am', '9:30 am'
    m = re.search(r"\b(\d{1,2})(?::(\d{2}))?\s*(am|pm)\b", s)
    if m:
        hour = int(m.group(1))
        minute = int(m.group(2) or "0")
        if hour > 12 or minute > 59:
            return None
        period = m.group(3)
        if period == "pm" and hour != 12:
            hour = hour + 12
        if period == "am" and hour == 12:
            hour = 0
        return format_hhmm(time(hour=hour, minute=minute))

    # 24-hour format like '14:30' or '9:00'
    m2 = re.search(r"\b([01]?\d|2[0-3]):([0-5]\d)\b", s)
    if m2:
        return format_hhmm(time(hour=int(m2.group(1)), minute=int(m2.group(2))))

    return None


def resolve_tz(name: Optional[str]) -> Optional[tzinfo]:
    # None means the system local zone
    return ZoneInfo(name) if name else None


def local_start_label(value: str, tz: Optional[tzinfo] = None) -> str:
    """Truncate an ISO-8601 timestamp to local 'HH:MM'.

    Aware timestamps are converted to tz (or the system zone when tz is None).
    Naive ones are taken as already local. Seconds are dropped.
    """
    dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if dt.tzinfo is not None:
        dt = dt.astimezone(tz)
    return format_hhmm(dt)
