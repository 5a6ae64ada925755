"""
Clock abstraction.

The engine never reads the system clock. Callers obtain a single "now"
from a Clock once per request/derivation and pass it explicitly, so that
every field derived for one document is mutually consistent.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol


class Clock(Protocol):
    """Protocol for supplying the current instant."""

    def now(self) -> datetime:
        """Return the current instant."""
        ...


class SystemClock:
    """Wall-clock time. Used only at the service boundary."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Always returns the same instant. Used by tests and `--as-of`."""

    def __init__(self, instant: datetime | date):
        if not isinstance(instant, datetime):
            instant = datetime(instant.year, instant.month, instant.day)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def __repr__(self) -> str:
        return f"FixedClock({self._instant.isoformat()})"


def to_day(value: datetime | date) -> date:
    """Truncate an instant to calendar-day precision."""
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    return value
