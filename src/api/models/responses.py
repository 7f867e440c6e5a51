"""Pydantic response models for API endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str  # "healthy" or "unhealthy"
    version: str
    database_available: bool
    requests_logged: int | None = None
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class RevenuePoint(BaseModel):
    """One bar of the monthly revenue chart."""

    month_year: str
    label: str  # 'Jan 25'
    revenue: float


class VenueCount(BaseModel):
    venue: str
    count: int


class ErrorResponse(BaseModel):
    """Error envelope returned under "detail" for every failed request."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    INVALID_REQUEST = "INVALID_REQUEST"  # unknown preset, bad custom date
    VALIDATION_ERROR = "VALIDATION_ERROR"  # malformed body or rejected by the services
    INTERNAL_ERROR = "INTERNAL_ERROR"
