"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import ReportConfig
from models.events import Event

TZ = ZoneInfo("America/New_York")
MONDAY = date(2025, 11, 3)


def at(day: date, hour: int, minute: int = 0) -> datetime:
    """Aware datetime in the test zone."""
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=TZ)


@pytest.fixture
def zone():
    return TZ


@pytest.fixture
def monday():
    return MONDAY


@pytest.fixture
def report_config():
    """Two working weeks, 8 AM to 6 PM, weekends included."""
    return ReportConfig(
        window_length_days=14,
        day_start_hour=8,
        day_end_hour=18,
        skip_weekends=False,
        time_zone="America/New_York",
        calendar_ids=("teresa@example.com",),
    )


@pytest.fixture
def sample_event():
    """One-hour meeting on Monday morning."""
    return Event(
        start=at(MONDAY, 10),
        end=at(MONDAY, 11),
        subject="Campaign sync",
        calendar="Calendar",
    )


@pytest.fixture
def sample_raw_event():
    """Raw collaborator record for the same meeting."""
    return {
        "subject": "Campaign sync",
        "calendar": "Calendar",
        "start": datetime(2025, 11, 3, 10, 0),
        "end": datetime(2025, 11, 3, 11, 0),
        "all_day": False,
    }


@pytest.fixture(autouse=True)
def graph_credentials(monkeypatch):
    """App registration values so credential checks pass unless a test clears them."""
    monkeypatch.setattr("core.config.GRAPH_TENANT_ID", "tenant-id")
    monkeypatch.setattr("core.config.GRAPH_APP_ID", "app-id")
    monkeypatch.setattr("core.config.GRAPH_CLIENT_SECRET", "client-secret")
