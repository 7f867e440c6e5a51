"""Calendar grid endpoint."""

from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_today
from api.handlers import run_logged, start_log
from api.models.requests import CalendarRequest
from core.config import WEEKDAY_HEADERS
from core.dates import format_date, format_time_range
from core.validation import validate_notes
from services.calendar import build_calendar, shift_reference

router = APIRouter(prefix="/v1")


@router.post("/calendar")
async def calendar_endpoint(
    request: Request,
    body: CalendarRequest,
    today: date = Depends(get_today),
):
    """
    Build the monthly or weekly calendar grid with bookings and notes attached.

    referenceDate defaults to today; step moves that many periods back or
    forward first (months land on the 1st, weeks move by 7 days).
    """
    request_log = start_log(
        request,
        event_count=len(body.events),
        note_count=len(body.notes),
        view_mode=body.view_mode,
    )

    def compute() -> dict:
        current = body.today or today
        reference = body.reference_date or current
        if body.step:
            reference = shift_reference(reference, body.view_mode, body.step)

        notes = validate_notes(body.notes)
        for note in notes:
            if note["error_message"]:
                request_log.warn(f"Note {note.get('id')}: {note['error_message']}")

        view = build_calendar(reference, body.view_mode, current, body.events, notes, body.include_pending)

        data = asdict(view)
        data["weekdays"] = WEEKDAY_HEADERS
        data["previous"] = format_date(shift_reference(view.reference_date, view.view_mode, -1))
        data["next"] = format_date(shift_reference(view.reference_date, view.view_mode, 1))
        for week in data["weeks"]:
            for cell in week:
                cell["events"] = [{**e, "timeLabel": format_time_range(e)} for e in cell["events"]]
        return data

    return run_logged(request_log, compute)
