"""
Data models for calendars and events.

Raw collaborator output uses TypedDict; validated events are frozen
dataclasses.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import TypedDict


class CalendarInfo(TypedDict):
    """Resolved calendar identifier."""
    identifier: str
    user_id: str
    user_email: str
    calendar_id: str
    calendar_name: str


class RawEvent(TypedDict):
    """Event as returned by the calendar collaborator, before validation."""
    subject: str
    calendar: str
    start: datetime | None
    end: datetime | None
    all_day: bool


@dataclass(frozen=True)
class Event:
    """Validated calendar event with times in UTC."""

    start: datetime
    end: datetime
    all_day: bool = False
    subject: str = ""
    calendar: str = ""
