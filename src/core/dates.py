"""
Date and time helpers shared by the calendar, filters and analytics.

Every date the system compares is first rendered as a zero-padded
``YYYY-MM-DD`` string, so string order and calendar order agree. None of
these helpers raise on bad input; they return an empty value instead.
"""

import calendar
import re
from datetime import date, datetime, time

DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ].*)?$")
TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")
MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")

END_OF_DAY = time(23, 59, 59, 999000)
INVALID_TIME = "Invalid Time"

MONTH_NAMES_SHORT = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
MONTH_NAMES_FULL = list(calendar.month_name)[1:]


def parse_date(value) -> date | None:
    """
    Parse a date-like value into a calendar date.

    Accepts date, datetime or a 'YYYY-MM-DD' string (an ISO time suffix is
    ignored). Returns None for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    match = DATE_RE.match(value.strip())
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def format_date(value) -> str:
    """Format as zero-padded YYYY-MM-DD, or '' if the value isn't a date."""
    d = parse_date(value)
    if d is None:
        return ""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def start_of_day(value) -> datetime | None:
    d = parse_date(value)
    if d is None:
        return None
    return datetime.combine(d, time.min)


def end_of_day(value) -> datetime | None:
    """Last representable millisecond of the day (23:59:59.999)."""
    d = parse_date(value)
    if d is None:
        return None
    return datetime.combine(d, END_OF_DAY)


def format_time_12hour(hhmm) -> str:
    """
    Convert 24-hour 'HH:MM' to 12-hour display.

    '13:30' -> '1:30 PM', '00:05' -> '12:05 AM', '12:00' -> '12:00 PM'.
    Malformed input gives 'Invalid Time'.
    """
    if not isinstance(hhmm, str):
        return INVALID_TIME
    match = TIME_RE.match(hhmm.strip())
    if not match:
        return INVALID_TIME

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return INVALID_TIME

    suffix = "AM" if hour < 12 else "PM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {suffix}"


def format_time_range(event: dict) -> str:
    """Time label for an event card: 'All Day', '9:00 AM - 5:00 PM', or ''."""
    if event.get("allDay"):
        return "All Day"

    start = event.get("startTime") or ""
    end = event.get("endTime") or ""
    if start and end:
        return f"{format_time_12hour(start)} - {format_time_12hour(end)}"
    if start:
        return format_time_12hour(start)
    if end:
        return format_time_12hour(end)
    return ""


def month_year_key(value) -> str:
    """Grouping key 'YYYY-MM' for a date, or '' if unparseable."""
    d = parse_date(value)
    if d is None:
        return ""
    return f"{d.year:04d}-{d.month:02d}"


def parse_month_key(key) -> tuple[int, int] | None:
    """Split a 'YYYY-MM' key into (year, month)."""
    if not isinstance(key, str):
        return None
    match = MONTH_KEY_RE.match(key.strip())
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return None
    return year, month


def month_label_short(key: str) -> str:
    """'2025-01' -> 'Jan 25' (chart axis label)."""
    parsed = parse_month_key(key)
    if parsed is None:
        return ""
    year, month = parsed
    return f"{MONTH_NAMES_SHORT[month - 1]} {str(year)[-2:]}"


def month_label_long(key: str) -> str:
    """'2025-01' -> 'January 2025'."""
    parsed = parse_month_key(key)
    if parsed is None:
        return ""
    year, month = parsed
    return f"{MONTH_NAMES_FULL[month - 1]} {year}"


def classify_date(value, today) -> str:
    """Return 'past', 'today' or 'future' relative to today ('' if unparseable)."""
    d = parse_date(value)
    ref = parse_date(today)
    if d is None or ref is None:
        return ""
    if d < ref:
        return "past"
    if d == ref:
        return "today"
    return "future"


def add_months(d: date, months: int) -> date:
    """First day of the month `months` away from d's month."""
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def last_day_of_month(d: date) -> date:
    _, last_day = calendar.monthrange(d.year, d.month)
    return d.replace(day=last_day)
