"""
Value types for the availability computation.

Interval and window boundaries are in UTC; rendering converts them to the
configured zone.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo


@dataclass(frozen=True)
class Interval:
    """A busy block or a free slot."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class DayWindow:
    """Working-hours boundary for one calendar date in the given zone."""

    date: date
    start: datetime
    end: datetime
    zone: tzinfo = timezone.utc

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class DayAvailability:
    """One report entry: a day and its free slots in chronological order."""

    window: DayWindow
    free_slots: tuple[Interval, ...] = ()

    @property
    def is_fully_booked(self) -> bool:
        return not self.free_slots
