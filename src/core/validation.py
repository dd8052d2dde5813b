"""
Event validation and normalization.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from models.events import Event, RawEvent


def to_utc(dt: datetime, zone: ZoneInfo) -> datetime:
    """Read naive datetimes as wall-clock time in the zone; return UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=zone)
    return dt.astimezone(timezone.utc)


def describe_event(raw: RawEvent) -> str:
    """Short label for diagnostics, e.g. 'Standup' (CES Calendar)."""
    subject = raw.get("subject") or "(no title)"
    calendar = raw.get("calendar")
    return f"'{subject}' ({calendar})" if calendar else f"'{subject}'"


def normalize_events(
    raw_events: list[RawEvent],
    zone: ZoneInfo,
    range_start: datetime | None = None,
    range_end: datetime | None = None,
) -> tuple[list[Event], list[tuple[str, str]]]:
    """
    Validate raw events and convert their times to UTC.

    Checks:
    1. Start and end are present
    2. Start is not after end

    Events failing a check are dropped and reported as a 'malformed_event'
    diagnostic. When a range is given, events that do not overlap
    [range_start, range_end) are dropped without a diagnostic.

    Returns:
        Tuple of (events, diagnostics)
    """
    events = []
    diagnostics = []

    for raw in raw_events:
        start = raw.get("start")
        end = raw.get("end")

        if start is None or end is None:
            diagnostics.append(
                ("malformed_event", f"Event {describe_event(raw)} is missing a start or end time")
            )
            continue

        start = to_utc(start, zone)
        end = to_utc(end, zone)

        if start > end:
            diagnostics.append(
                (
                    "malformed_event",
                    f"Event {describe_event(raw)} ends before it starts "
                    f"({start.astimezone(zone).isoformat()} > {end.astimezone(zone).isoformat()})",
                )
            )
            continue

        if range_start is not None and end <= range_start:
            continue
        if range_end is not None and start >= range_end:
            continue

        events.append(
            Event(
                start=start,
                end=end,
                all_day=bool(raw.get("all_day")),
                subject=raw.get("subject") or "",
                calendar=raw.get("calendar") or "",
            )
        )

    return events, diagnostics
