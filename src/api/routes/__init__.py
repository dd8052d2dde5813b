"""API route modules."""

from .availability import router as availability_router
from .health import router as health_router

__all__ = ["availability_router", "health_router"]
