"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import (
    API_VERSION,
    ConfigurationError,
    check_graph_credentials,
    load_report_config,
)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if the availability configuration and Graph credentials are
    valid, 503 otherwise.
    """
    timestamp = datetime.now(timezone.utc).isoformat()

    try:
        config = load_report_config()
        check_graph_credentials()
    except ConfigurationError as e:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                calendars_configured=0,
                timestamp=timestamp,
                error=str(e),
            ).model_dump(),
        )

    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        calendars_configured=len(config.calendar_ids),
        timestamp=timestamp,
    )
