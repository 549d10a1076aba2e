"""Runtime settings read from the environment (and a local .env file)."""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DB_PATH = os.path.join(os.path.dirname(__file__), "bookings.db")
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    webhook_url: str = ""
    db_path: str = DEFAULT_DB_PATH
    http_timeout: float = DEFAULT_TIMEOUT
    timezone: Optional[str] = None
    log_file: Optional[str] = None


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build Settings from BOOKING_* environment variables.

    Values already present in the environment win over the .env file.
    """
    load_dotenv(env_file)
    timeout = os.getenv("BOOKING_HTTP_TIMEOUT")
    return Settings(
        webhook_url=os.getenv("BOOKING_WEBHOOK_URL", ""),
        db_path=os.getenv("BOOKING_DB_PATH") or DEFAULT_DB_PATH,
        http_timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
        timezone=os.getenv("BOOKING_TIMEZONE") or None,
        log_file=os.getenv("BOOKING_LOG_FILE") or None,
    )
