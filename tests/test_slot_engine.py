from datetime import date, datetime, timedelta, time
from zoneinfo import ZoneInfo

from slot_engine import filter_availability, generate_slots, next_available
from working_hours import Weekday, WORKING_HOURS


def test_monday_slots():
    slots = generate_slots("2024-01-08")
    assert len(slots) == 44
    assert slots[0] == "09:00"
    assert slots[-1] == "19:45"


def test_sunday_slots():
    slots = generate_slots(date(2024, 1, 14))
    assert len(slots) == 20
    assert slots[-1] == "13:45"


def test_slots_step_fifteen_minutes_for_a_whole_week():
    for offset in range(7):
        day = date(2024, 1, 8) + timedelta(days=offset)
        start, end = WORKING_HOURS[Weekday(day.weekday())]
        slots = generate_slots(day)
        assert slots[0] == start.strftime("%H:%M")
        times = [datetime.strptime(s, "%H:%M") for s in slots]
        for a, b in zip(times, times[1:]):
            assert b - a == timedelta(minutes=15)
        assert all(t.time() < end for t in times)


def test_partial_last_slot_dropped():
    hours = {d: (time(9, 0), time(10, 10)) for d in Weekday}
    slots = generate_slots("2024-01-08", hours=hours)
    assert slots == ["09:00", "09:15", "09:30", "09:45", "10:00"]


def test_filter_marks_only_booked_start():
    events = [{"start": {"dateTime": "2024-01-08T09:15:00"}}]
    result = filter_availability(["09:00", "09:15", "09:30"], events)
    assert result == [
        {"time": "09:00", "available": True},
        {"time": "09:15", "available": False},
        {"time": "09:30", "available": True},
    ]


def test_filter_is_pure():
    slots = generate_slots("2024-01-08")
    events = [{"start": {"dateTime": "2024-01-08T10:00:00"}}, {"start": {"date": "2024-01-08"}}]
    first = filter_availability(slots, events)
    assert filter_availability(slots, events) == first
    assert len(first) == len(slots)


def test_off_grid_booking_does_not_block():
    events = [{"start": {"dateTime": "2024-01-08T09:20:00"}}]
    result = filter_availability(["09:15", "09:30"], events)
    assert all(s["available"] for s in result)


def test_filter_converts_offsets_to_local_zone():
    events = [{"start": {"dateTime": "2024-01-08T08:15:00Z"}}]
    result = filter_availability(["09:00", "09:15"], events, ZoneInfo("Europe/Amsterdam"))
    assert [s["available"] for s in result] == [True, False]


def test_next_available():
    slots = [
        {"time": "09:00", "available": False},
        {"time": "09:15", "available": True},
        {"time": "09:30", "available": True},
    ]
    assert next_available(slots) == "09:15"
    assert next_available(slots, after_time="09:15") == "09:30"
    assert next_available(slots[:1]) is None
