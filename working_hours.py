"""Weekly opening hours for the cabins."""
from datetime import date, time
from enum import Enum
from types import MappingProxyType
from typing import Tuple, Union

from errors import UnknownDayError


class Weekday(Enum):
    # values follow date.weekday()
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


WORKING_HOURS = MappingProxyType({
    Weekday.MONDAY: (time(9, 0), time(20, 0)),
    Weekday.TUESDAY: (time(9, 0), time(20, 0)),
    Weekday.WEDNESDAY: (time(9, 0), time(20, 0)),
    Weekday.THURSDAY: (time(9, 0), time(20, 0)),
    Weekday.FRIDAY: (time(9, 0), time(20, 0)),
    Weekday.SATURDAY: (time(9, 0), time(16, 0)),
    Weekday.SUNDAY: (time(9, 0), time(14, 0)),
})


def _check(hours) -> None:
    missing = [d.name for d in Weekday if d not in hours]
    if missing:
        raise ValueError(f"Working hours missing for: {', '.join(missing)}")
    for d, (start, end) in hours.items():
        if not start < end:
            raise ValueError(f"Opening time must be before closing time on {d.name.lower()}")


_check(WORKING_HOURS)


def weekday_of(day: Union[date, Weekday, str]) -> Weekday:
    """Map a date (or a weekday name like 'monday') to a Weekday."""
    if isinstance(day, Weekday):
        return day
    if isinstance(day, date):
        return Weekday(day.weekday())
    if isinstance(day, str):
        try:
            return Weekday[day.strip().upper()]
        except KeyError:
            pass
    raise UnknownDayError(f"Not a weekday: {day!r}")


def hours_for(day: Union[date, Weekday, str], hours=WORKING_HOURS) -> Tuple[time, time]:
    wd = weekday_of(day)
    if wd not in hours:
        raise UnknownDayError(f"No working hours for {wd.name.lower()}")
    return hours[wd]


def is_open(day: Union[date, Weekday, str], at: time, hours=WORKING_HOURS) -> bool:
    start, end = hours_for(day, hours)
    return start <= at < end
