"""Statistics dashboard and month comparison endpoints."""

from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_today
from api.handlers import error_detail, run_logged, start_log
from api.models.requests import ComparisonRequest, DashboardRequest
from api.models.responses import ErrorCodes, RevenuePoint, VenueCount
from core.config import PRESETS
from core.dates import month_label_short, parse_date
from models.events import DashboardSnapshot, DateRange
from services.analytics import build_dashboard, filtered_events, monthly_breakdown
from services.comparison import available_months, compare_months
from services.date_range import resolve_preset

router = APIRouter(prefix="/v1")


def serialize_dashboard(snapshot: DashboardSnapshot) -> dict:
    data = asdict(snapshot)
    data["revenue_series"] = [
        RevenuePoint(month_year=key, label=month_label_short(key), revenue=revenue).model_dump()
        for key, revenue in snapshot.revenue_series
    ]
    data["venues"] = [VenueCount(venue=venue, count=count).model_dump() for venue, count in snapshot.venues]
    return data


def _check_custom_dates(body: DashboardRequest):
    invalid = [
        f"{name}: '{value}' (expected YYYY-MM-DD)"
        for name, value in (("customStart", body.custom_start), ("customEnd", body.custom_end))
        if value and parse_date(value) is None
    ]
    if invalid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail("Invalid custom date", ErrorCodes.INVALID_REQUEST, invalid),
        )


@router.post("/dashboard")
async def dashboard_endpoint(
    request: Request,
    body: DashboardRequest,
    today: date = Depends(get_today),
):
    """
    Compute the statistics dashboard for the given bookings.

    Only finished bookings inside the selected date range are counted.
    """
    request_log = start_log(
        request,
        event_count=len(body.events),
        preset=body.preset,
    )

    def compute() -> dict:
        if body.preset not in PRESETS:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=error_detail(
                    f"Unknown preset '{body.preset}'",
                    ErrorCodes.INVALID_REQUEST,
                    [f"Expected one of: {', '.join(PRESETS)}"],
                ),
            )
        _check_custom_dates(body)

        date_range = resolve_preset(body.preset, body.today or today, body.custom_start, body.custom_end)
        snapshot = build_dashboard(body.events, date_range)
        return serialize_dashboard(snapshot)

    return run_logged(request_log, compute)


@router.post("/comparison")
async def comparison_endpoint(request: Request, body: ComparisonRequest):
    """
    Summarize the months between startMonth and endMonth (YYYY-MM, inclusive).

    Both bounds are required; a missing bound returns an empty selection.
    """
    request_log = start_log(
        request,
        event_count=len(body.events),
    )

    def compute() -> dict:
        monthly = monthly_breakdown(filtered_events(body.events, DateRange()))
        result = compare_months(monthly, body.start_month, body.end_month)
        data = asdict(result)
        data["available_months"] = available_months(monthly)
        return data

    return run_logged(request_log, compute)
