from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Set, Union

from time_utils import format_hhmm, local_start_label, parse_day
from working_hours import WORKING_HOURS, hours_for

SLOT_MINUTES = 15


def generate_slots(day: Union[date, str], hours=WORKING_HOURS, step_minutes: int = SLOT_MINUTES) -> List[str]:
    """Return every 'HH:MM' slot start for the day, in ascending order.

    Slots start at opening time and step by step_minutes; a slot starting at
    or after closing time is not emitted, so a trailing partial slot is dropped.
    """
    d = parse_day(day)
    start, end = hours_for(d, hours)

    current = datetime.combine(d, start)
    end_at = datetime.combine(d, end)
    step = timedelta(minutes=step_minutes)

    slots = []
    while current < end_at:
        slots.append(format_hhmm(current))
        current += step
    return slots


def booked_times(booked_events: Iterable[dict], tz=None) -> Set[str]:
    """Collect the local 'HH:MM' start of each booked event.

    Events without a start dateTime (all-day entries) are skipped.
    """
    out = set()
    for event in booked_events or []:
        start = (event or {}).get("start") or {}
        value = start.get("dateTime")
        if not value:
            continue
        out.add(local_start_label(value, tz))
    return out


def filter_availability(slots: Iterable[str], booked_events: Iterable[dict], tz=None) -> List[Dict]:
    """Mark each slot free or taken.

    A slot is taken only when some event starts exactly on it (to the minute).
    Events starting off the 15-minute grid do not block the slot they overlap.
    """
    taken = booked_times(booked_events, tz)
    return [{"time": s, "available": s not in taken} for s in slots]


def next_available(time_slots: Iterable[Dict], after_time: Optional[str] = None) -> Optional[str]:
    """Return the first free slot label, optionally strictly after after_time."""
    for s in time_slots:
        if after_time and s["time"] <= after_time:
            continue
        if s["available"]:
            return s["time"]
    return None
