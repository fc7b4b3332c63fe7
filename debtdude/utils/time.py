"""Clock helpers."""

from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def display_time(moment: datetime) -> str:
    """Format a timestamp the way chat bubbles show it (HH:MM)."""
    return moment.strftime("%H:%M")


def as_utc(moment: datetime) -> datetime:
    """Treat a naive datetime as UTC; aware datetimes pass through."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment
