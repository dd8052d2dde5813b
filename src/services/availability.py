"""
Free time computation.

For each reported day the working window is built, every event touching it
is clipped to a busy interval, busy intervals are merged, and the gaps
between them are the free slots.
"""

from dataclasses import replace
from datetime import date, datetime, time, timedelta, timezone

from core.config import WEEKEND_DAYS, ReportConfig
from models.availability import DayAvailability, DayWindow, Interval
from models.events import Event


def report_dates(anchor: date, config: ReportConfig) -> list[date]:
    """Consecutive dates covered by the report, starting at the anchor."""
    return [anchor + timedelta(days=d) for d in range(config.window_length_days)]


def report_range(anchor: date, config: ReportConfig) -> tuple[datetime, datetime]:
    """Midnight of the anchor through midnight after the last reported day."""
    zone = config.zone
    start = datetime.combine(anchor, time.min, tzinfo=zone)
    end = datetime.combine(
        anchor + timedelta(days=config.window_length_days), time.min, tzinfo=zone
    )
    return start, end


def build_day_window(day: date, config: ReportConfig) -> DayWindow | None:
    """
    Working-hours window for a date.

    Returns None for weekend dates when weekends are skipped; those days
    are left out of the report entirely.
    """
    if config.skip_weekends and day.weekday() in WEEKEND_DAYS:
        return None

    zone = config.zone
    return DayWindow(
        date=day,
        start=_utc(datetime.combine(day, time(config.day_start_hour), tzinfo=zone)),
        end=_utc(datetime.combine(day, time(config.day_end_hour), tzinfo=zone)),
        zone=zone,
    )


def _utc(dt: datetime) -> datetime:
    return dt.astimezone(timezone.utc)


def _on_date(dt: datetime, window: DayWindow) -> bool:
    return dt.astimezone(window.zone).date() == window.date


def project_busy_intervals(events: list[Event], window: DayWindow) -> list[Interval]:
    """
    Clip every event touching the window into a busy interval.

    An all-day event starting on the window's date blocks the whole window.
    Any other event counts only when its clipped interval is non-empty and it
    starts on the date, ends on the date, or spans the whole window.
    Returned intervals are in UTC.
    """
    window_start = _utc(window.start)
    window_end = _utc(window.end)

    busy = []
    for event in events:
        if event.all_day and _on_date(event.start, window):
            busy.append(Interval(window_start, window_end))
            continue

        event_start = _utc(event.start)
        event_end = _utc(event.end)
        start = max(event_start, window_start)
        end = min(event_end, window_end)
        if start >= end:
            continue

        spans_window = event_start < window_start and event_end > window_end
        if _on_date(event.start, window) or _on_date(event.end, window) or spans_window:
            busy.append(Interval(start, end))

    return busy


def merge_intervals(intervals: list[Interval]) -> list[Interval]:
    """Merge overlapping or adjacent intervals into an ordered disjoint list."""
    merged: list[Interval] = []
    for interval in sorted(intervals, key=lambda i: _utc(i.start)):
        if merged and interval.start <= merged[-1].end:
            if interval.end > merged[-1].end:
                merged[-1] = replace(merged[-1], end=interval.end)
        else:
            merged.append(interval)
    return merged


def compute_free_slots(window: DayWindow, busy: list[Interval]) -> list[Interval]:
    """Gaps between merged busy intervals inside the window."""
    slots = []
    cursor = _utc(window.start)
    for interval in busy:
        if cursor < interval.start:
            slots.append(Interval(cursor, interval.start))
        cursor = max(cursor, interval.end)

    window_end = _utc(window.end)
    if cursor < window_end:
        slots.append(Interval(cursor, window_end))

    return slots


def build_report(
    events: list[Event], config: ReportConfig, anchor: date
) -> list[DayAvailability]:
    """
    Compute free slots for each reported day, in chronological order.

    Args:
        events: Validated events covering the reporting range
        config: Run configuration
        anchor: First reported date (usually today in the configured zone)
    """
    report = []
    for day in report_dates(anchor, config):
        window = build_day_window(day, config)
        if window is None:
            continue

        busy = merge_intervals(project_busy_intervals(events, window))
        slots = compute_free_slots(window, busy)
        report.append(DayAvailability(window=window, free_slots=tuple(slots)))

    return report
