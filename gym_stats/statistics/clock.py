# gym_stats/statistics/clock.py
"""
Clock abstraction

Functions that need "today" take a clock instead of reading the system time,
so tests can pin the instant.

Usage:
    clock = FixedClock(datetime(2025, 5, 15, 9, 30))
    clock.today()   # date(2025, 5, 15)
"""

from datetime import date, datetime
from typing import Optional, Union


class Clock:
    """Base clock; subclasses return the current instant."""

    def now(self) -> datetime:
        raise NotImplementedError

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Local wall-clock time."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Clock frozen at a given instant."""

    def __init__(self, instant: Union[date, datetime]):
        if not isinstance(instant, datetime):
            instant = datetime(instant.year, instant.month, instant.day)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def __repr__(self):
        return f"FixedClock({self._instant.isoformat()})"


def resolve_clock(clock: Optional[Clock]) -> Clock:
    return clock if clock is not None else SystemClock()
