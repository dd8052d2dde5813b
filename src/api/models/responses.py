"""Pydantic response models for API endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    calendars_configured: int
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class SlotResponse(BaseModel):
    """One free slot."""

    start: str  # ISO 8601 in the configured zone
    end: str
    label: str  # e.g. "9:00 AM – 10:00 AM"


class DayResponse(BaseModel):
    """Free slots for one day."""

    date: str  # YYYY-MM-DD
    heading: str  # e.g. "Monday, November 3, 2025"
    available: bool
    slots: list[SlotResponse] = []


class AvailabilityResponse(BaseModel):
    """Availability report."""

    anchor_date: str
    time_zone: str
    generated_at: str
    days: list[DayResponse]
    diagnostics: list[str] = []


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
