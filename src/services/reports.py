"""
Excel report of the statistics dashboard.
"""

from datetime import date, datetime
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from core.config import CLIENT_HEADERS, MONTHLY_HEADERS, SUMMARY_HEADERS
from core.dates import month_label_long
from models.events import DashboardSnapshot, DateRange
from services.analytics import format_currency

CURRENCY_FORMAT = '"$"#,##0'


def format_date_display(d: date | datetime) -> str:
    """Format date as M/D/YYYY (platform-safe, no zero-padding)."""
    return f"{d.month}/{d.day}/{d.year}"


def format_range_label(date_range: DateRange) -> str:
    """'1/1/2025 - 3/31/2025', 'Since 1/1/2025', 'Until ...' or 'All time'."""
    if date_range.start and date_range.end:
        return f"{format_date_display(date_range.start)} - {format_date_display(date_range.end)}"
    if date_range.start:
        return f"Since {format_date_display(date_range.start)}"
    if date_range.end:
        return f"Until {format_date_display(date_range.end)}"
    return "All time"


def write_header_row(ws, headers: list[str]):
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)


def summary_rows(snapshot: DashboardSnapshot) -> list[tuple[str, str]]:
    kpis = snapshot.kpis
    rows = [
        ("Date range", format_range_label(snapshot.date_range)),
        ("Total revenue", format_currency(kpis.total_revenue)),
        ("Finished events", str(kpis.event_count)),
        ("Avg. revenue / event", format_currency(kpis.average_revenue)),
        ("Busiest venue", kpis.busiest_venue or "n/a"),
    ]

    if snapshot.venue_summary:
        summary = snapshot.venue_summary
        text = f"{summary.top_venue} ({summary.share_percent}% of events)"
        if summary.runner_up:
            text += f", then {summary.runner_up}"
        rows.append(("Top venue share", text))

    trend = snapshot.trend
    if trend:
        if trend.percent_change is None:
            change = f"{format_currency(trend.delta)} vs {month_label_long(trend.previous_month)}"
        else:
            change = f"{trend.percent_change:+.0f}% vs {month_label_long(trend.previous_month)}"
        rows.append(("Revenue trend", f"{trend.direction} ({change})"))

    rows.append(("High-value threshold", format_currency(snapshot.high_value.threshold)))
    rows.append(("High-value events", str(len(snapshot.high_value.events))))
    rows.append(("Repeat clients", str(len(snapshot.repeat_clients))))

    for insight in snapshot.insights:
        value = insight.value
        if insight.description:
            value += f" ({insight.description})"
        rows.append((insight.label, value))

    return rows


def write_summary_sheet(ws, snapshot: DashboardSnapshot):
    """Sheet 1 - KPI and insight summary as Metric | Value rows."""
    write_header_row(ws, SUMMARY_HEADERS)
    for row_idx, (label, value) in enumerate(summary_rows(snapshot), start=2):
        ws.cell(row=row_idx, column=1, value=label)
        ws.cell(row=row_idx, column=2, value=value)


def write_monthly_sheet(ws, snapshot: DashboardSnapshot):
    """
    Sheet 2 - one row per month with a column per venue.

    Structure:
    Row 1: Month | Events | Revenue | Venue1 | Venue2 | ...
    Rows 2..n: monthly values
    Last row: Total with SUM formulas
    """
    venues = [venue for venue, _ in snapshot.venues]
    write_header_row(ws, MONTHLY_HEADERS + venues)

    for row_idx, stat in enumerate(snapshot.monthly, start=2):
        ws.cell(row=row_idx, column=1, value=month_label_long(stat.month_year))
        ws.cell(row=row_idx, column=2, value=stat.count)
        revenue_cell = ws.cell(row=row_idx, column=3, value=stat.total_revenue)
        revenue_cell.number_format = CURRENCY_FORMAT
        for venue_idx, venue in enumerate(venues, start=4):
            ws.cell(row=row_idx, column=venue_idx, value=stat.venues.get(venue, 0))

    if not snapshot.monthly:
        return

    first_row = 2
    last_row = len(snapshot.monthly) + 1
    total_row = last_row + 1
    ws.cell(row=total_row, column=1, value="Total").font = Font(bold=True)
    for col in range(2, len(venues) + 4):
        letter = get_column_letter(col)
        cell = ws.cell(row=total_row, column=col, value=f"=SUM({letter}{first_row}:{letter}{last_row})")
        cell.font = Font(bold=True)
        if col == 3:
            cell.number_format = CURRENCY_FORMAT


def write_clients_sheet(ws, snapshot: DashboardSnapshot):
    """Sheet 3 - every client, highest revenue first."""
    write_header_row(ws, CLIENT_HEADERS)
    for row_idx, client in enumerate(snapshot.clients, start=2):
        ws.cell(row=row_idx, column=1, value=client.name)
        ws.cell(row=row_idx, column=2, value=client.count)
        ws.cell(row=row_idx, column=3, value=client.revenue).number_format = CURRENCY_FORMAT


def build_dashboard_workbook(snapshot: DashboardSnapshot) -> Workbook:
    wb = Workbook()

    ws_summary = wb.active
    ws_summary.title = "Summary"
    write_summary_sheet(ws_summary, snapshot)

    write_monthly_sheet(wb.create_sheet(title="Monthly Breakdown"), snapshot)
    write_clients_sheet(wb.create_sheet(title="Top Clients"), snapshot)

    return wb


def create_dashboard_excel_report(snapshot: DashboardSnapshot, output_path: Path):
    """
    Create Excel dashboard report with three sheets.

    Sheet 1: "Summary" - KPIs, trend and insights
    Sheet 2: "Monthly Breakdown" - counts, revenue and venue usage per month
    Sheet 3: "Top Clients" - revenue and bookings per client
    """
    wb = build_dashboard_workbook(snapshot)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
    print(f"Saved Excel report to: {output_path}")
