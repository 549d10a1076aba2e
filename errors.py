"""Error types raised by the booking modules, plus a small Result wrapper.

- BookingError: base class
- UnknownDayError: a value that does not name a weekday
- UpstreamUnavailableError: the webhook answered a query with a non-2xx status
- StoreError: anything failing inside the bookings store
- NotificationError: the webhook call itself failed
"""
from dataclasses import dataclass
from typing import Any, Optional


class BookingError(Exception):
    """Base class for booking related errors"""
    pass


class UnknownDayError(BookingError):
    pass


class UpstreamUnavailableError(BookingError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class StoreError(BookingError):
    pass


class NotificationError(BookingError):
    """Webhook call failed.

    booking_id is set when the store mutation already went through, so the
    caller knows the booking exists even though the webhook was not told.
    """

    def __init__(self, message: str, booking_id: Optional[str] = None):
        super().__init__(message)
        self.booking_id = booking_id


@dataclass(frozen=True)
class Result:
    ok: bool
    value: Any = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "Result":
        return cls(ok=False, error=error)

    def unwrap(self) -> Any:
        if not self.ok:
            raise self.error
        return self.value
