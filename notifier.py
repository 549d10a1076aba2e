"""Client for the automation webhook that is told about bookings and asked for booked events."""
from typing import Any, Dict, Optional

import requests

from errors import NotificationError, UpstreamUnavailableError


class WebhookNotifier:
    def __init__(self, url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        if not url:
            raise ValueError("A webhook URL is required (set BOOKING_WEBHOOK_URL)")
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def post(self, payload: Dict[str, Any]) -> requests.Response:
        try:
            return self.session.post(
                self.url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NotificationError(f"Webhook call failed: {e}") from e

    def query(self, payload: Dict[str, Any], what: str = "query webhook") -> Any:
        """POST and decode the JSON answer; non-2xx raises UpstreamUnavailableError."""
        resp = self.post(payload)
        if not resp.ok:
            raise UpstreamUnavailableError(f"Failed to {what} (HTTP {resp.status_code})", status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise NotificationError(f"Webhook returned a non-JSON body: {e}") from e

    def notify(self, payload: Dict[str, Any]) -> None:
        # response body and status are not inspected
        self.post(payload)
