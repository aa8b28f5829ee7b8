# sar_api/core/clock.py

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """Source of the current time. Injected so timestamping is deterministic in tests."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """UTC wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
