"""
Clock abstraction: "today" and "now" are read through it so tests can pin them
"""
from datetime import date, datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def today(self) -> date:
        ...

    def now(self) -> datetime:
        ...


class SystemClock:
    """Local wall clock, read at call time."""

    def today(self) -> date:
        return date.today()

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
