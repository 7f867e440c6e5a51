#!/usr/bin/env python3
"""
Create the statistics dashboard report from a bookings snapshot.

Generates an Excel workbook with three sheets:
- Summary: KPIs, revenue trend and insights
- Monthly Breakdown: events, revenue and venue usage per month
- Top Clients: revenue and bookings per client

Usage:
    python src/scripts/create_dashboard_report.py --input data/snapshot.json --preset thisYear
    python src/scripts/create_dashboard_report.py --input data/snapshot.json --preset custom \\
        --start 2025-01-01 --end 2025-06-30
"""

import argparse
import sys
import traceback
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DEFAULT_PRESET, OUTPUT_DIR, PRESETS
from core.dates import format_date, month_label_long, parse_date
from core.sources import JsonFileSource
from core.validation import validate_events
from services.analytics import build_dashboard, format_currency
from services.date_range import resolve_preset
from services.reports import create_dashboard_excel_report, format_range_label


def iso_date(value: str) -> date:
    """argparse type for YYYY-MM-DD options."""
    parsed = parse_date(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"invalid date '{value}' (expected YYYY-MM-DD)")
    return parsed


def main(
    input_path: Path,
    preset: str = DEFAULT_PRESET,
    start: str | date | None = None,
    end: str | date | None = None,
    output_path: Path | None = None,
    today: date | None = None,
) -> Path:
    """
    Main entry point for the dashboard report.

    Raises:
        ValueError: if start or end is given but is not a date
    """
    for name, value in (("start", start), ("end", end)):
        if value and parse_date(value) is None:
            raise ValueError(f"Invalid {name} date '{value}' (expected YYYY-MM-DD)")
    today = today or date.today()

    # 1. Load snapshot
    source = JsonFileSource(input_path)
    events = source.list_events()
    print(f"Loaded {len(events)} events from {input_path}")

    # 2. Report problem records (they are still counted where possible)
    problems = [e for e in validate_events(events) if e.get("error_message")]
    print(f"Events with problems: {len(problems)}")
    for event in problems:
        print(f"  {event.get('id', '?')}: {event['error_message']}")

    # 3. Resolve date range
    date_range = resolve_preset(preset, today, start, end)
    print(f"\nDate range ({preset}): {format_range_label(date_range)}")

    # 4. Compute dashboard
    snapshot = build_dashboard(events, date_range)
    kpis = snapshot.kpis
    print(f"Finished events: {kpis.event_count}")
    print(f"Total revenue: {format_currency(kpis.total_revenue)}")
    print(f"Busiest venue: {kpis.busiest_venue or 'n/a'}")
    if snapshot.busiest_month:
        print(f"Busiest month: {month_label_long(snapshot.busiest_month.month_year)}")

    # 5. Write workbook
    if output_path is None:
        output_dir = OUTPUT_DIR / "reports" / "dashboard"
        output_path = output_dir / f"dashboard_{preset}_{format_date(today)}.xlsx"
    create_dashboard_excel_report(snapshot, output_path)

    print("\nDone!")
    return output_path


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate dashboard report from a bookings snapshot")
    parser.add_argument("--input", required=True, type=Path, help="Snapshot JSON file ({events, notes})")
    parser.add_argument("--preset", default=DEFAULT_PRESET, choices=PRESETS, help="Date range preset")
    parser.add_argument("--start", type=iso_date, help="Custom range start (YYYY-MM-DD)")
    parser.add_argument("--end", type=iso_date, help="Custom range end (YYYY-MM-DD)")
    parser.add_argument("--output", type=Path, help="Output .xlsx path")
    parser.add_argument("--today", type=iso_date, help="Override today's date (YYYY-MM-DD)")
    args = parser.parse_args()

    try:
        main(args.input, args.preset, args.start, args.end, args.output, args.today)
    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        sys.exit(1)
