"""Cabin booking operations.

BookingService ties together the slot engine, the bookings store and the
automation webhook. Store writes and webhook notifications run one after the
other with no transaction around them: when the notification fails after the
write, NotificationError is raised with booking_id set.

Every operation logs its failure and re-raises it unchanged. Callers that
prefer branching over try/except can go through attempt(), which returns a
Result instead.
"""
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

from bookings_store import BookingsStore
from config import Settings, load_settings
from errors import BookingError, NotificationError, Result, StoreError
from logger import get_logger
from notifier import WebhookNotifier
from slot_engine import filter_availability, generate_slots
from time_utils import normalize_time, parse_day, resolve_tz

CONFIRMED = "confirmed"
CANCELLED = "cancelled"

REQUIRED_FIELDS = ("cabinId", "userId", "date", "time")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BookingService:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[BookingsStore] = None,
        notifier: Optional[WebhookNotifier] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.settings = settings or load_settings()
        self.store = store or BookingsStore(self.settings.db_path)
        self.notifier = notifier or WebhookNotifier(self.settings.webhook_url, self.settings.http_timeout)
        self.tz = resolve_tz(self.settings.timezone)
        self.clock = clock
        self.log = get_logger(log_file=self.settings.log_file)

    def fetch_available_time_slots(self, day: Union[date, str]) -> List[Dict]:
        try:
            d = parse_day(day)
            booked = self.notifier.query({"date": d.isoformat()}, what="fetch time slots")
            items = (booked.get("items") if isinstance(booked, dict) else None) or []
            return filter_availability(generate_slots(d), items, self.tz)
        except Exception:
            self.log.exception(f"Error fetching time slots for {day}")
            raise

    def check_cabin_availability(self, cabin_id: str, day: Union[date, str, None] = None) -> Any:
        """Ask the webhook about a cabin; the answer is returned as-is."""
        try:
            # today as a UTC calendar date
            d = parse_day(day) if day is not None else self.clock().astimezone(timezone.utc).date()
            return self.notifier.query(
                {"cabinId": cabin_id, "date": d.isoformat(), "type": "availability_check"},
                what="check availability",
            )
        except Exception:
            self.log.exception(f"Error checking cabin availability for {cabin_id}")
            raise

    def create_booking(self, data: Dict) -> str:
        """Store a confirmed booking, tell the webhook, return the new id.

        Raises ValueError if cabinId, userId, date or time is missing or malformed.
        """
        booking_id = None
        try:
            booking = self._clean(data)
            now = iso_timestamp(self.clock())
            booking_id = self.store.add({
                **booking,
                "status": CONFIRMED,
                "createdAt": now,
                "updatedAt": now,
            })
            self.log.info(f"Created booking {booking_id} for cabin {booking['cabinId']} on {booking['date']} {booking['time']}")

            payload = {k: v for k, v in booking.items() if k != "meta"}
            payload.update(booking["meta"])
            payload["id"] = booking_id
            self._notify({"type": "new_booking", "booking": payload}, booking_id)
            return booking_id
        except Exception:
            self.log.exception(f"Error creating booking (id={booking_id})")
            raise

    def get_user_bookings(self, user_id: str) -> List[Dict]:
        try:
            return self.store.find(userId=user_id)
        except Exception:
            self.log.exception(f"Error fetching bookings for user {user_id}")
            raise

    def get_booking(self, booking_id: str) -> Optional[Dict]:
        try:
            return self.store.get(booking_id)
        except Exception:
            self.log.exception(f"Error fetching booking {booking_id}")
            raise

    def cancel_booking(self, booking_id: str) -> None:
        try:
            updated = self.store.update(booking_id, {
                "status": CANCELLED,
                "updatedAt": iso_timestamp(self.clock()),
            })
            if updated is None:
                raise StoreError(f"No booking with id {booking_id}")
            self.log.info(f"Cancelled booking {booking_id}")
            self._notify({"type": "cancel_booking", "bookingId": booking_id}, booking_id)
        except Exception:
            self.log.exception(f"Error cancelling booking {booking_id}")
            raise

    def attempt(self, operation: Callable, *args, **kwargs) -> Result:
        """Run one of the operations above and capture its outcome as a Result."""
        try:
            return Result.success(operation(*args, **kwargs))
        except (BookingError, ValueError) as e:
            return Result.failure(e)

    def _notify(self, payload: Dict, booking_id: str) -> None:
        try:
            self.notifier.notify(payload)
        except NotificationError as e:
            raise NotificationError(str(e), booking_id=booking_id) from e

    @staticmethod
    def _clean(data: Dict) -> Dict:
        missing = [f for f in REQUIRED_FIELDS if not data.get(f)]
        if missing:
            raise ValueError(f"Missing booking fields: {', '.join(missing)}")
        hhmm = normalize_time(str(data["time"]))
        if hhmm is None:
            raise ValueError(f"Invalid booking time: {data['time']!r}")
        extra = {k: v for k, v in data.items() if k not in REQUIRED_FIELDS and k not in ("meta", "id", "status", "createdAt", "updatedAt")}
        meta = dict(data.get("meta") or {})
        meta.update(extra)
        return {
            "cabinId": str(data["cabinId"]),
            "userId": str(data["userId"]),
            "date": parse_day(data["date"]).isoformat(),
            "time": hhmm,
            "meta": meta,
        }
