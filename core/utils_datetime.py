"""
DateTime utilities shared by the gateway and the notification queue.
Provides the timezone-aware clock and the backend's time-of-day format.
"""
from datetime import datetime
from typing import Optional
import pytz

from core.config import settings


# Timezone configuration
TIMEZONE = pytz.timezone(settings.timezone)


def get_current_datetime() -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(TIMEZONE)


def current_millis() -> int:
    """Milliseconds since the epoch."""
    return int(get_current_datetime().timestamp() * 1000)


def format_wire_time(value: Optional[str]) -> Optional[str]:
    """
    Expand a time of day to the backend's HH:MM:SS format.

    Examples:
        "18"       -> "18:00:00"
        "18:30"    -> "18:30:00"
        "18:30:45" -> "18:30:45"

    Args:
        value: Time string as held by the domain model

    Returns:
        Fully qualified time string; empty or missing values are returned as-is
    """
    if not value:
        return value

    value = value.strip()
    parts = value.split(':')

    if len(parts) == 1:
        hour = parts[0].zfill(2) if parts[0].isdigit() else parts[0]
        return f"{hour}:00:00"
    if len(parts) == 2:
        return f"{value}:00"
    return value
