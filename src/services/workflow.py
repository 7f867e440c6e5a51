"""
Booking status workflow: pending -> upcoming -> finished.

These helpers only compute the new record; saving it is the store's job.
"""

from core.config import STATUS_FINISHED, STATUS_ORDER
from core.dates import format_date, parse_date
from core.validation import normalize_status


def next_status(status: str) -> str | None:
    """Status one step to the right, or None at the end of the workflow."""
    current = normalize_status(status)
    if not current:
        return None
    index = STATUS_ORDER.index(current)
    return STATUS_ORDER[index + 1] if index + 1 < len(STATUS_ORDER) else None


def previous_status(status: str) -> str | None:
    current = normalize_status(status)
    if not current:
        return None
    index = STATUS_ORDER.index(current)
    return STATUS_ORDER[index - 1] if index > 0 else None


def move_event(event: dict, new_status: str, today) -> dict:
    """
    Return a copy of event with its status changed.

    A booking moved to finished without a usable date gets today's date so
    it still shows up in the statistics.

    Raises:
        ValueError: if new_status is not a workflow status
    """
    status = normalize_status(new_status)
    if not status:
        raise ValueError(f"Unknown status '{new_status}'")

    moved = {**event, "status": status}
    if status == STATUS_FINISHED and parse_date(event.get("eventDate")) is None:
        moved["eventDate"] = format_date(today)
    return moved


def events_by_status(events: list[dict], status: str) -> list[dict]:
    wanted = normalize_status(status)
    return [e for e in events if normalize_status(e.get("status")) == wanted]


def sort_upcoming(events: list[dict]) -> list[dict]:
    """Soonest first; bookings without a date go last."""
    return sorted(events, key=lambda e: (format_date(e.get("eventDate")) or "9999-99-99"))


def finished_in_month(events: list[dict], year: int | None = None, month: int | None = None) -> list[dict]:
    """
    Finished bookings for one month. With year or month unset the full
    finished list is returned.
    """
    finished = events_by_status(events, STATUS_FINISHED)
    if not year or not month:
        return finished
    prefix = f"{year:04d}-{month:02d}"
    return [e for e in finished if format_date(e.get("eventDate")).startswith(prefix)]


def available_years(events: list[dict]) -> list[int]:
    """Years that have at least one finished booking."""
    years = {
        d.year
        for d in (parse_date(e.get("eventDate")) for e in events_by_status(events, STATUS_FINISHED))
        if d is not None
    }
    return sorted(years)
