"""API route modules."""

from .calendar import router as calendar_router
from .dashboard import router as dashboard_router
from .health import router as health_router

__all__ = ["health_router", "dashboard_router", "calendar_router"]
