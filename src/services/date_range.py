"""
Resolve dashboard date-range presets into concrete boundaries.
"""

from datetime import timedelta

from core.dates import add_months, end_of_day, last_day_of_month, parse_date, start_of_day
from models.events import DateRange


def resolve_preset(preset: str, today, custom_start=None, custom_end=None) -> DateRange:
    """
    Turn a preset name into a DateRange relative to today.

    Starts are at 00:00 and ends at 23:59:59.999. 'allTime' is unbounded on
    both sides; 'custom' uses whichever explicit dates were given. Unknown
    presets fall back to the last 90 days.

    Raises:
        ValueError: if today isn't a valid date
    """
    today_date = parse_date(today)
    if today_date is None:
        raise ValueError(f"Invalid current date '{today}'")

    if preset == "last30days":
        return DateRange(start_of_day(today_date - timedelta(days=30)), end_of_day(today_date), preset)

    if preset == "last90days":
        return DateRange(start_of_day(today_date - timedelta(days=90)), end_of_day(today_date), preset)

    if preset == "thisMonth":
        first = today_date.replace(day=1)
        return DateRange(start_of_day(first), end_of_day(last_day_of_month(first)), preset)

    if preset == "lastMonth":
        first = add_months(today_date, -1)
        return DateRange(start_of_day(first), end_of_day(last_day_of_month(first)), preset)

    if preset == "thisYear":
        return DateRange(
            start_of_day(today_date.replace(month=1, day=1)),
            end_of_day(today_date.replace(month=12, day=31)),
            preset,
        )

    if preset == "allTime":
        return DateRange(None, None, preset)

    if preset == "custom":
        # Blank or unparseable custom bounds leave that side open
        return DateRange(start_of_day(custom_start), end_of_day(custom_end), preset)

    return resolve_preset("last90days", today_date)


def filter_by_range(events: list[dict], date_range: DateRange) -> list[dict]:
    """Keep events whose eventDate falls inside the range."""
    return [e for e in events if date_range.contains(e.get("eventDate"))]
