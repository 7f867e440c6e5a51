"""
Record coercion and validation.

Bookings and notes come from an external store with loosely typed fields.
The coercion helpers here never raise; the validate_* functions collect
problems into an error_message field instead of rejecting records.
"""

import math
from collections import defaultdict

from core.config import (
    DEFAULT_NOTE_COLOR,
    MAX_AMOUNT,
    MONEY_FIELDS,
    NOTE_COLORS,
    STATUS_ALIASES,
    STATUS_FINISHED,
    STATUS_ORDER,
    UNKNOWN_VENUE,
    UNNAMED_CLIENT,
)
from core.dates import INVALID_TIME, format_date, format_time_12hour, parse_date


def _parse_number(value) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            amount = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            amount = float(value.strip().replace(",", "").lstrip("$"))
        except ValueError:
            return None
    else:
        return None
    return amount if math.isfinite(amount) else None


def parse_amount(value) -> float | None:
    """
    Parse a monetary field, returning None when it isn't a finite number
    or its size exceeds MAX_AMOUNT.
    """
    amount = _parse_number(value)
    if amount is None or abs(amount) > MAX_AMOUNT:
        return None
    return amount


def to_amount(value) -> float:
    """Coerce a monetary field to a finite float; anything else counts as 0."""
    amount = parse_amount(value)
    return 0.0 if amount is None else amount


def normalize_status(status) -> str:
    """Map a stored status onto pending/upcoming/finished ('' if unknown)."""
    if not isinstance(status, str):
        return ""
    value = status.strip().lower()
    value = STATUS_ALIASES.get(value, value)
    return value if value in STATUS_ORDER else ""


def get_client_name(event: dict) -> str:
    name = event.get("clientName")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return UNNAMED_CLIENT


def get_venue(event: dict) -> str:
    venue = event.get("buildingArea")
    if isinstance(venue, str) and venue.strip():
        return venue.strip()
    return UNKNOWN_VENUE


def get_revenue(event: dict) -> float:
    return to_amount(event.get("grandTotal"))


def is_finished(event: dict) -> bool:
    """Finished bookings with a usable date are the only ones analytics sees."""
    return (
        normalize_status(event.get("status")) == STATUS_FINISHED
        and bool(event.get("eventDate"))
        and parse_date(event.get("eventDate")) is not None
    )


def validate_event(event: dict) -> list[str]:
    """List the problems with one booking record."""
    errors = []

    if not normalize_status(event.get("status")):
        errors.append(f"Unknown status '{event.get('status')}'")

    raw_date = event.get("eventDate")
    if raw_date and not format_date(raw_date):
        errors.append(f"Invalid event date '{raw_date}'")
    if normalize_status(event.get("status")) == STATUS_FINISHED and not raw_date:
        errors.append("Finished event has no date")

    if not event.get("allDay"):
        for key in ("startTime", "endTime"):
            value = event.get(key)
            if value and format_time_12hour(value) == INVALID_TIME:
                errors.append(f"Invalid {key} '{value}'")

    for key in MONEY_FIELDS:
        value = event.get(key)
        if key == "downPaymentReceived" and isinstance(value, bool):
            continue
        if value in (None, ""):
            continue
        amount = _parse_number(value)
        if amount is None:
            errors.append(f"Non-numeric {key} '{value}'")
        elif abs(amount) > MAX_AMOUNT:
            errors.append(f"Out-of-range {key} '{value}'")

    return errors


def validate_events(events: list[dict]) -> list[dict]:
    """
    Return copies of the events with error_message populated.

    Checks:
    1. Status is one of the workflow statuses
    2. Dates and times parse
    3. Monetary fields are numeric and no larger than MAX_AMOUNT
    4. IDs are unique across the collection
    """
    id_counts: dict[str, int] = defaultdict(int)
    for event in events:
        if event.get("id"):
            id_counts[event["id"]] += 1

    validated = []
    for event in events:
        errors = validate_event(event)
        if event.get("id") and id_counts[event["id"]] > 1:
            errors.append(f"Duplicate event id '{event['id']}'")
        validated.append({**event, "error_message": "; ".join(errors) if errors else None})

    return validated


def validate_note(note: dict) -> list[str]:
    errors = []
    title = note.get("title")
    if not isinstance(title, str) or not title.strip():
        errors.append("Note title is required")
    if not note.get("date"):
        errors.append("Note date is required")
    elif not format_date(note["date"]):
        errors.append(f"Invalid note date '{note['date']}'")
    color = note.get("color")
    if color and color not in NOTE_COLORS:
        errors.append(f"Unknown note color '{color}'")
    return errors


def validate_notes(notes: list[dict]) -> list[dict]:
    """Return copies of the notes with a default color and error_message populated."""
    validated = []
    for note in notes:
        errors = validate_note(note)
        validated.append(
            {
                **note,
                "color": note.get("color") or DEFAULT_NOTE_COLOR,
                "error_message": "; ".join(errors) if errors else None,
            }
        )
    return validated
