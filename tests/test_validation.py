"""
Tests for event normalization.
"""

from datetime import datetime, timedelta, timezone

from conftest import MONDAY, TZ, at
from core.validation import normalize_events


def test_naive_times_use_configured_zone(sample_raw_event):
    events, diagnostics = normalize_events([sample_raw_event], TZ)

    assert diagnostics == []
    assert len(events) == 1
    assert events[0].start == at(MONDAY, 10)
    assert events[0].start.tzinfo == timezone.utc
    assert events[0].subject == "Campaign sync"
    assert not events[0].all_day


def test_aware_times_are_converted(sample_raw_event):
    raw = {
        **sample_raw_event,
        "start": datetime(2025, 11, 3, 15, 0, tzinfo=timezone.utc),
        "end": datetime(2025, 11, 3, 16, 0, tzinfo=timezone.utc),
    }

    events, _ = normalize_events([raw], TZ)

    # UTC-5 in November
    assert events[0].start.astimezone(TZ).hour == 10
    assert events[0].end.astimezone(TZ).hour == 11
    assert events[0].start.tzinfo == timezone.utc


def test_end_before_start_is_dropped(sample_raw_event):
    raw = {**sample_raw_event, "end": datetime(2025, 11, 3, 9, 0)}

    events, diagnostics = normalize_events([raw, sample_raw_event], TZ)

    assert len(events) == 1
    assert len(diagnostics) == 1
    detail_type, message = diagnostics[0]
    assert detail_type == "malformed_event"
    assert "Campaign sync" in message


def test_missing_times_are_dropped(sample_raw_event):
    raw = {**sample_raw_event, "start": None}

    events, diagnostics = normalize_events([raw], TZ)

    assert events == []
    assert diagnostics[0][0] == "malformed_event"


def test_zero_length_event_is_kept(sample_raw_event):
    raw = {**sample_raw_event, "end": sample_raw_event["start"]}

    events, diagnostics = normalize_events([raw], TZ)

    assert len(events) == 1
    assert diagnostics == []


def test_events_outside_range_are_dropped(sample_raw_event):
    before = {**sample_raw_event, "start": datetime(2025, 11, 1, 9), "end": datetime(2025, 11, 1, 10)}
    touching = {**sample_raw_event, "start": datetime(2025, 11, 2, 23), "end": datetime(2025, 11, 3, 0)}
    spanning = {**sample_raw_event, "start": datetime(2025, 11, 1, 9), "end": datetime(2025, 11, 5, 9)}

    events, diagnostics = normalize_events(
        [before, touching, spanning, sample_raw_event],
        TZ,
        range_start=at(MONDAY, 0),
        range_end=at(MONDAY.replace(day=4), 0),
    )

    assert diagnostics == []
    assert [e.start for e in events] == [at(MONDAY.replace(day=1), 9), at(MONDAY, 10)]


def test_all_day_flag_is_kept(sample_raw_event):
    raw = {
        **sample_raw_event,
        "start": datetime(2025, 11, 3),
        "end": datetime(2025, 11, 4),
        "all_day": True,
    }

    events, _ = normalize_events([raw], TZ)

    assert events[0].all_day


def test_event_inside_repeated_fall_back_hour_is_kept(sample_raw_event):
    # 05:30Z is 1:30 AM EDT and 06:15Z is 1:15 AM EST on 2026-11-01
    raw = {
        **sample_raw_event,
        "start": datetime(2026, 11, 1, 5, 30, tzinfo=timezone.utc),
        "end": datetime(2026, 11, 1, 6, 15, tzinfo=timezone.utc),
    }

    events, diagnostics = normalize_events([raw], TZ)

    assert diagnostics == []
    assert len(events) == 1
    assert events[0].end - events[0].start == timedelta(minutes=45)


def test_fall_back_wall_clock_times_keep_their_offsets(sample_raw_event):
    raw = {
        **sample_raw_event,
        "start": datetime(2026, 11, 1, 1, 30, tzinfo=TZ),
        "end": datetime(2026, 11, 1, 1, 15, fold=1, tzinfo=TZ),
    }

    events, diagnostics = normalize_events([raw], TZ)

    assert diagnostics == []
    assert events[0].start == datetime(2026, 11, 1, 5, 30, tzinfo=timezone.utc)
    assert events[0].end == datetime(2026, 11, 1, 6, 15, tzinfo=timezone.utc)
