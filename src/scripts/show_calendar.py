#!/usr/bin/env python3
"""
Print a monthly or weekly calendar with bookings and notes from a snapshot.

Usage:
    python src/scripts/show_calendar.py --input data/snapshot.json --month 2025-03
    python src/scripts/show_calendar.py --input data/snapshot.json --week 2025-03-12 --include-pending
"""

import argparse
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import VIEW_MONTHLY, VIEW_WEEKLY, WEEKDAY_HEADERS
from core.dates import format_time_range, parse_date
from core.sources import JsonFileSource
from services.calendar import build_calendar


def render(view) -> str:
    lines = [view.title, " ".join(f"{h:>4}" for h in WEEKDAY_HEADERS)]
    for week in view.weeks:
        row = []
        for cell in week:
            marker = "*" if cell.events or cell.notes else " "
            day = f"{cell.day.day:>2}" if cell.is_current_period else "  "
            row.append(f" {day}{marker}")
        lines.append(" ".join(row))

    lines.append("")
    for cell in view.days:
        for event in cell.events:
            time_label = format_time_range(event)
            suffix = f" ({time_label})" if time_label else ""
            client = f"{event['clientName']} - " if event.get("clientName") else ""
            lines.append(f"{cell.date_str}  {client}{event.get('eventName') or 'Unnamed Event'}{suffix}")
        for note in cell.notes:
            lines.append(f"{cell.date_str}  [note] {note.get('title', '')}")
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(description="Print a booking calendar")
    parser.add_argument("--input", required=True, type=Path, help="Snapshot JSON file ({events, notes})")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--month", help="Month to show (YYYY-MM). Defaults to the current month.")
    group.add_argument("--week", help="Any date in the week to show (YYYY-MM-DD)")
    parser.add_argument("--include-pending", action="store_true", help="Also show pending bookings")
    args = parser.parse_args()

    today = date.today()
    if args.week:
        reference, view_mode = parse_date(args.week), VIEW_WEEKLY
    elif args.month:
        reference, view_mode = parse_date(f"{args.month}-01"), VIEW_MONTHLY
    else:
        reference, view_mode = today, VIEW_MONTHLY

    if reference is None:
        print("Invalid date; expected --month YYYY-MM or --week YYYY-MM-DD")
        sys.exit(1)

    source = JsonFileSource(args.input)
    view = build_calendar(
        reference,
        view_mode,
        today,
        source.list_events(),
        source.list_calendar_notes(),
        include_pending=args.include_pending,
    )
    print(render(view))


if __name__ == "__main__":
    main()
