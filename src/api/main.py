"""
Booking Insights API.

Stateless report endpoints: callers post a snapshot of bookings (and
calendar notes) and get calendar grids or dashboard statistics back.

Run from src/ with:
    uvicorn api.main:app
"""

import warnings
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import calendar_router, dashboard_router, health_router
from core.config import API_DEBUG, API_HOST, API_PORT, API_VERSION, DB_PATH


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Reports are still served without the log database; they just go unlogged
    if not DB_PATH.exists():
        warnings.warn(f"Request log database not found at {DB_PATH} (run src/scripts/init_db.py)")
    yield


app = FastAPI(
    title="Booking Insights API",
    description="Calendar grids and revenue analytics for event bookings",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

if API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )


def _error_response(status_code: int, error: str, code: str, details: list[str]) -> JSONResponse:
    body = ErrorResponse(error=error, code=code, details=details)
    return JSONResponse(status_code=status_code, content={"detail": body.model_dump()})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies use the same envelope as the report errors."""
    details = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return _error_response(422, "Request validation failed", ErrorCodes.VALIDATION_ERROR, details)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    return _error_response(500, "Internal server error", ErrorCodes.INTERNAL_ERROR, [])


for router in (health_router, dashboard_router, calendar_router):
    app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=API_HOST, port=API_PORT, reload=API_DEBUG)
