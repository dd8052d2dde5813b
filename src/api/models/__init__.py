"""API Pydantic models."""

from .responses import (
    AvailabilityResponse,
    DayResponse,
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    SlotResponse,
)

__all__ = [
    "AvailabilityResponse",
    "DayResponse",
    "ErrorCodes",
    "ErrorResponse",
    "HealthResponse",
    "SlotResponse",
]
