"""
Compare a span of months from the monthly breakdown.
"""

from core.dates import parse_month_key
from models.events import ComparisonResult, MonthlyStat


def available_months(monthly: list[MonthlyStat]) -> list[str]:
    """Month keys a user can pick as comparison bounds, oldest first."""
    return sorted(stat.month_year for stat in monthly)


def compare_months(monthly: list[MonthlyStat], start_month: str | None, end_month: str | None) -> ComparisonResult:
    """
    Slice the breakdown to months between start_month and end_month inclusive.

    Both bounds are required: with either one missing (or not a YYYY-MM key)
    nothing is selected and the result is empty. Keys compare as strings,
    which matches calendar order because they are zero-padded.
    """
    if parse_month_key(start_month) is None or parse_month_key(end_month) is None:
        return ComparisonResult(start_month, end_month, [], 0, 0.0, 0.0)
    start_month, end_month = start_month.strip(), end_month.strip()

    months = sorted(
        (stat for stat in monthly if start_month <= stat.month_year <= end_month),
        key=lambda stat: stat.month_year,
    )
    total_count = sum(stat.count for stat in months)
    total_revenue = sum(stat.total_revenue for stat in months)

    return ComparisonResult(
        start_month=start_month,
        end_month=end_month,
        months=months,
        total_count=total_count,
        total_revenue=total_revenue,
        average_revenue=total_revenue / len(months) if months else 0.0,
    )
