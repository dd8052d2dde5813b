"""Availability report endpoint."""

import time
import warnings
from datetime import date, datetime
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import Response

from api.dependencies import verify_api_key
from api.logging import RequestLog, log_request
from api.models.responses import (
    AvailabilityResponse,
    DayResponse,
    ErrorCodes,
    SlotResponse,
)
from core.config import (
    MAX_DAYS_AHEAD,
    ConfigurationError,
    check_graph_credentials,
    load_report_config,
)
from core.validation import normalize_events
from models.availability import DayAvailability
from services.availability import build_report, report_range
from services.calendar import fetch_events
from services.reports import format_day_heading, format_slot, render_markdown

router = APIRouter(prefix="/v1")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def parse_anchor_date(date_str: str | None) -> date | None:
    """Parse anchor date string to date object."""
    if not date_str:
        return None
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid anchor_date format",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": ["Expected format: YYYY-MM-DD"],
            },
        )


def to_day_response(day: DayAvailability, zone) -> DayResponse:
    return DayResponse(
        date=day.window.date.isoformat(),
        heading=format_day_heading(day.window.date),
        available=not day.is_fully_booked,
        slots=[
            SlotResponse(
                start=slot.start.astimezone(zone).isoformat(),
                end=slot.end.astimezone(zone).isoformat(),
                label=format_slot(slot, zone),
            )
            for slot in day.free_slots
        ],
    )


@router.get("/availability")
async def get_availability(
    request: Request,
    anchor_date: Annotated[
        str | None, Query(description="First reported date (YYYY-MM-DD), defaults to today")
    ] = None,
    days: Annotated[
        int | None, Query(ge=1, le=MAX_DAYS_AHEAD, description="Number of days to report")
    ] = None,
    skip_weekends: Annotated[
        bool | None, Query(description="Leave Saturdays and Sundays out")
    ] = None,
    format: Annotated[Literal["json", "markdown"], Query()] = "json",
    _api_key: str = Depends(verify_api_key),
):
    """
    Compute free time for the configured calendars.

    Returns JSON by default, or the Markdown document with format=markdown.
    """
    start_time = time.time()

    request_log = RequestLog(
        endpoint="/v1/availability",
        method="GET",
        client_ip=get_client_ip(request),
        anchor_date=anchor_date,
        days_requested=days,
    )

    try:
        parsed_date = parse_anchor_date(anchor_date)
        config = load_report_config(days_ahead=days, skip_weekends=skip_weekends)
        check_graph_credentials()
        anchor = parsed_date or datetime.now(config.zone).date()
        range_start, range_end = report_range(anchor, config)

        raw_events, diagnostics = await fetch_events(
            list(config.calendar_ids), range_start, range_end, config.time_zone
        )
        events, event_diagnostics = normalize_events(
            raw_events, config.zone, range_start, range_end
        )
        diagnostics.extend(event_diagnostics)

        report = build_report(events, config, anchor)
        generated_at = datetime.now(config.zone)

        request_log.status_code = 200
        request_log.days_reported = len(report)
        request_log.free_slots = sum(len(day.free_slots) for day in report)
        request_log.details.extend(diagnostics)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        if format == "markdown":
            return Response(
                content=render_markdown(report, config.zone, generated_at),
                media_type="text/markdown; charset=utf-8",
            )

        return AvailabilityResponse(
            anchor_date=anchor.isoformat(),
            time_zone=config.time_zone,
            generated_at=generated_at.isoformat(),
            days=[to_day_response(day, config.zone) for day in report],
            diagnostics=[message for _, message in diagnostics],
        )

    except HTTPException as e:
        request_log.status_code = e.status_code
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
            for detail in e.detail.get("details", []):
                request_log.details.append(("validation_error", detail))
        else:
            request_log.error_message = str(e.detail)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        raise

    except ConfigurationError as e:
        details = [d for d in str(e).split("\n") if d.strip()]
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.CONFIGURATION_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Server configuration error",
                "code": ErrorCodes.CONFIGURATION_ERROR,
                "details": details,
            },
        )

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        # Always log the request
        try:
            log_request(request_log)
        except Exception as e:
            warnings.warn(f"Request log not written: {e}")
