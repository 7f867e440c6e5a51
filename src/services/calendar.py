"""
Calendar grid construction and the day index that fills it.
"""

from datetime import date, timedelta

from core.config import (
    MAX_GRID_DAYS,
    STATUS_PENDING,
    STATUS_UPCOMING,
    VIEW_MONTHLY,
    VIEW_MODES,
    VIEW_WEEKLY,
)
from core.dates import add_months, format_date, last_day_of_month, month_label_long, month_year_key, parse_date
from core.validation import normalize_status
from models.events import CalendarCell, CalendarView


def _check_view_mode(view_mode: str):
    if view_mode not in VIEW_MODES:
        raise ValueError(f"Unknown view mode '{view_mode}' (expected one of: {', '.join(sorted(VIEW_MODES))})")


def week_start(d: date) -> date:
    """Sunday on or before d."""
    # date.weekday(): Monday=0 ... Sunday=6
    return d - timedelta(days=(d.weekday() + 1) % 7)


def week_end(d: date) -> date:
    """Saturday on or after d."""
    return d + timedelta(days=(5 - d.weekday()) % 7)


def grid_bounds(reference: date, view_mode: str) -> tuple[date, date]:
    """First and last day shown for the period containing reference."""
    _check_view_mode(view_mode)
    if view_mode == VIEW_MONTHLY:
        first = reference.replace(day=1)
        return week_start(first), week_end(last_day_of_month(first))
    start = week_start(reference)
    return start, start + timedelta(days=6)


def events_for_day(events: list[dict], date_str: str) -> list[dict]:
    """Events whose eventDate string equals date_str exactly."""
    if not date_str:
        return []
    return [e for e in events if e.get("eventDate") == date_str]


def notes_for_day(notes: list[dict], date_str: str) -> list[dict]:
    if not date_str:
        return []
    return [n for n in notes if n.get("date") == date_str]


def calendar_events(events: list[dict], include_pending: bool = False) -> list[dict]:
    """Bookings the calendar shows: upcoming, plus pending when requested."""
    statuses = {STATUS_UPCOMING, STATUS_PENDING} if include_pending else {STATUS_UPCOMING}
    return [e for e in events if normalize_status(e.get("status")) in statuses]


def build_grid(
    reference: date,
    view_mode: str,
    today: date,
    events: list[dict] | None = None,
    notes: list[dict] | None = None,
) -> list[list[CalendarCell]]:
    """
    Build the weeks x 7 days grid for the period containing reference.

    Monthly grids run from the Sunday on or before the 1st to the Saturday
    on or after the last day; days from adjacent months are included with
    is_current_period=False. Weekly grids are the single Sunday-Saturday
    week around reference.
    """
    start, end = grid_bounds(reference, view_mode)
    events = events or []
    notes = notes or []
    current_month = month_year_key(reference)

    cells = []
    for offset in range(MAX_GRID_DAYS):
        day = start + timedelta(days=offset)
        if day > end:
            break
        date_str = format_date(day)
        if view_mode == VIEW_MONTHLY:
            in_period = month_year_key(day) == current_month
        else:
            in_period = True
        cells.append(
            CalendarCell(
                day=day,
                date_str=date_str,
                is_today=day == today,
                is_current_period=in_period,
                is_past=day < today,
                events=events_for_day(events, date_str),
                notes=notes_for_day(notes, date_str),
            )
        )

    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def shift_reference(reference: date, view_mode: str, step: int) -> date:
    """
    Move to the previous (step=-1) or next (step=1) period.

    Monthly navigation always lands on the 1st so short months never get
    skipped; weekly navigation moves exactly 7 days per step.
    """
    _check_view_mode(view_mode)
    if view_mode == VIEW_MONTHLY:
        return add_months(reference, step)
    return reference + timedelta(days=7 * step)


def period_title(reference: date, view_mode: str) -> str:
    """'March 2025' or 'Week of 3/9/2025'."""
    _check_view_mode(view_mode)
    if view_mode == VIEW_MONTHLY:
        return month_label_long(month_year_key(reference))
    start = week_start(reference)
    return f"Week of {start.month}/{start.day}/{start.year}"


def build_calendar(
    reference,
    view_mode: str,
    today,
    events: list[dict] | None = None,
    notes: list[dict] | None = None,
    include_pending: bool = False,
) -> CalendarView:
    """Grid for one period with the visible bookings and notes attached to each day."""
    ref = parse_date(reference)
    today_date = parse_date(today)
    if ref is None:
        raise ValueError(f"Invalid reference date '{reference}'")
    if today_date is None:
        raise ValueError(f"Invalid current date '{today}'")

    visible = calendar_events(events or [], include_pending)
    weeks = build_grid(ref, view_mode, today_date, visible, notes or [])

    return CalendarView(
        reference_date=ref,
        view_mode=view_mode,
        title=period_title(ref, view_mode),
        weeks=weeks,
    )
