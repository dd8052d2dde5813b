"""
Configuration constants and environment setup.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(ValueError):
    """Invalid configuration; raised before any computation starts."""


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name, str(default))
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{value}'") from None


# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = PROJECT_ROOT / "data" / "db" / "availability.db"
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

# "user@domain" for the default calendar, "user@domain/Calendar Name" for a named one
CALENDAR_IDS = [
    c.strip()
    for c in os.environ.get("AVAILABILITY_CALENDAR_IDS", "").split(",")
    if c.strip()
]

# =============================================================================
# AVAILABILITY CONFIGURATION
# =============================================================================

DAYS_AHEAD = _env_int("AVAILABILITY_DAYS_AHEAD", 14)
DAY_START_HOUR = _env_int("AVAILABILITY_DAY_START_HOUR", 8)  # 8 AM
DAY_END_HOUR = _env_int("AVAILABILITY_DAY_END_HOUR", 18)  # 6 PM
SKIP_WEEKENDS = os.environ.get("AVAILABILITY_SKIP_WEEKENDS", "false").lower() == "true"
TIME_ZONE = os.environ.get("AVAILABILITY_TIME_ZONE", "America/New_York")

WEEKEND_DAYS = {5, 6}  # Saturday, Sunday (date.weekday())

REPORT_TITLE = "Available Times"
NO_AVAILABILITY_TEXT = "No availability"

# =============================================================================
# MS GRAPH CREDENTIALS (from environment)
# =============================================================================

GRAPH_TENANT_ID = os.environ.get("MICROSOFT_GRAPH_TENANT_ID", "")
GRAPH_APP_ID = os.environ.get("MICROSOFT_GRAPH_APP_ID", "")
GRAPH_CLIENT_SECRET = os.environ.get("MICROSOFT_GRAPH_CLIENT_SECRET", "")

# =============================================================================
# API CONFIGURATION
# =============================================================================

AVAILABILITY_API_KEY = os.environ.get("AVAILABILITY_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = _env_int("API_PORT", 8000)
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
MAX_DAYS_AHEAD = 62
API_VERSION = "1.0.0"


def check_graph_credentials() -> None:
    """
    Raises:
        ConfigurationError: naming every unset app registration variable
    """
    missing = [
        name
        for name, value in {
            "MICROSOFT_GRAPH_TENANT_ID": GRAPH_TENANT_ID,
            "MICROSOFT_GRAPH_APP_ID": GRAPH_APP_ID,
            "MICROSOFT_GRAPH_CLIENT_SECRET": GRAPH_CLIENT_SECRET,
        }.items()
        if not value
    ]
    if missing:
        raise ConfigurationError(f"Missing Graph credentials: {', '.join(missing)}")


# =============================================================================
# REPORT CONFIG
# =============================================================================


@dataclass(frozen=True)
class ReportConfig:
    """Settings for one availability run. Validated on construction."""

    window_length_days: int
    day_start_hour: int
    day_end_hour: int
    skip_weekends: bool
    time_zone: str
    calendar_ids: tuple[str, ...]

    def __post_init__(self):
        errors = []
        if self.window_length_days < 1:
            errors.append(f"Window length must be positive, got {self.window_length_days}")
        for name in ("day_start_hour", "day_end_hour"):
            hour = getattr(self, name)
            if not 0 <= hour <= 23:
                errors.append(f"{name} must be between 0 and 23, got {hour}")
        if self.day_start_hour >= self.day_end_hour:
            errors.append(
                f"Day start hour ({self.day_start_hour}) must be before "
                f"day end hour ({self.day_end_hour})"
            )
        if not self.calendar_ids:
            errors.append("No calendar identifiers configured")
        try:
            ZoneInfo(self.time_zone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"Unknown time zone '{self.time_zone}'")

        if errors:
            raise ConfigurationError("\n".join(errors))

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.time_zone)


def load_report_config(
    days_ahead: int | None = None,
    skip_weekends: bool | None = None,
    calendar_ids: list[str] | None = None,
) -> ReportConfig:
    """
    Build the run configuration from environment constants.

    Arguments override the matching environment value for this run only.

    Raises:
        ConfigurationError: if any setting is invalid
    """
    return ReportConfig(
        window_length_days=DAYS_AHEAD if days_ahead is None else days_ahead,
        day_start_hour=DAY_START_HOUR,
        day_end_hour=DAY_END_HOUR,
        skip_weekends=SKIP_WEEKENDS if skip_weekends is None else skip_weekends,
        time_zone=TIME_ZONE,
        calendar_ids=tuple(CALENDAR_IDS if calendar_ids is None else calendar_ids),
    )
