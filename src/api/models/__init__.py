"""API Pydantic models."""

from .requests import CalendarRequest, ComparisonRequest, DashboardRequest, SnapshotRequest
from .responses import ErrorCodes, ErrorResponse, HealthResponse, RevenuePoint, VenueCount

__all__ = [
    "SnapshotRequest",
    "DashboardRequest",
    "CalendarRequest",
    "ComparisonRequest",
    "HealthResponse",
    "RevenuePoint",
    "VenueCount",
    "ErrorResponse",
    "ErrorCodes",
]
