"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.logging import count_requests
from api.models.responses import HealthResponse
from core.config import API_VERSION

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    200 while the request log is readable, 503 otherwise.

    The reports themselves never touch the database, so an unhealthy
    response only means requests are going unlogged.
    """
    requests_logged = count_requests()
    health = HealthResponse(
        status="healthy" if requests_logged is not None else "unhealthy",
        version=API_VERSION,
        database_available=requests_logged is not None,
        requests_logged=requests_logged,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
    if requests_logged is None:
        health.error = "Request log database not found"
        return JSONResponse(status_code=503, content=health.model_dump())
    return health
