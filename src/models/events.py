"""
Data models for bookings, calendar notes and the views derived from them.

Event and CalendarNote are TypedDicts because the records arrive as plain
dictionaries from the persistence layer and keep its camelCase keys.
Everything derived from them is a frozen dataclass rebuilt on every call.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TypedDict

from core.dates import start_of_day


class Event(TypedDict, total=False):
    """Booking record as stored."""
    id: str
    status: str  # "pending" | "upcoming" | "finished"
    eventDate: str  # YYYY-MM-DD or ""
    startTime: str  # HH:MM
    endTime: str  # HH:MM
    allDay: bool
    clientName: str
    eventName: str
    buildingArea: str
    notes: str
    priceGiven: float | str
    downPaymentRequired: float | str
    downPaymentReceived: float | str | bool
    amountDueAfter: float | str
    amountPaidAfter: float | str
    grandTotal: float | str
    securityDeposit: float | str
    files: list[dict]
    createdAt: str


class CalendarNote(TypedDict, total=False):
    """Free-form annotation pinned to a calendar day."""
    id: str
    title: str
    content: str
    color: str
    date: str  # YYYY-MM-DD


# =============================================================================
# CALENDAR
# =============================================================================


@dataclass(frozen=True)
class CalendarCell:
    day: date
    date_str: str
    is_today: bool
    is_current_period: bool
    is_past: bool
    events: list[dict] = field(default_factory=list)
    notes: list[dict] = field(default_factory=list)


@dataclass(frozen=True)
class CalendarView:
    """A full grid for one period plus the labels a host UI needs."""
    reference_date: date
    view_mode: str
    title: str
    weeks: list[list[CalendarCell]]

    @property
    def days(self) -> list[CalendarCell]:
        return [cell for week in self.weeks for cell in week]


# =============================================================================
# FILTERS
# =============================================================================


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive date boundary. A None bound leaves that side open.
    """
    start: datetime | None = None
    end: datetime | None = None
    preset: str = "allTime"

    def contains(self, value) -> bool:
        """True if the date (taken at midnight) falls inside the set bounds."""
        moment = start_of_day(value)
        if moment is None:
            return False
        if self.start is not None and moment < self.start:
            return False
        if self.end is not None and moment > self.end:
            return False
        return True


# =============================================================================
# ANALYTICS
# =============================================================================


@dataclass(frozen=True)
class MonthlyStat:
    month_year: str
    count: int
    total_revenue: float
    venues: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Kpis:
    total_revenue: float
    event_count: int
    average_revenue: float
    busiest_venue: str | None
    venue_usage: dict[str, int]


@dataclass(frozen=True)
class RevenueTrend:
    latest_month: str
    previous_month: str
    delta: float
    percent_change: float | None  # None when the previous month earned nothing
    direction: str  # "up" | "down"


@dataclass(frozen=True)
class VenueSummary:
    top_venue: str
    top_count: int
    share_percent: int
    runner_up: str | None


@dataclass(frozen=True)
class ClientStat:
    name: str
    revenue: float
    count: int


@dataclass(frozen=True)
class RankedEvent:
    id: str | None
    name: str
    client: str
    event_date: str
    revenue: float


@dataclass(frozen=True)
class HighValueSummary:
    threshold: float
    events: list[RankedEvent]


@dataclass(frozen=True)
class Insight:
    label: str
    value: str
    description: str = ""


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the statistics view shows for one filter selection."""
    date_range: DateRange
    kpis: Kpis
    monthly: list[MonthlyStat]
    revenue_series: list[tuple[str, float]]
    trend: RevenueTrend | None
    venues: list[tuple[str, int]]
    venue_summary: VenueSummary | None
    clients: list[ClientStat]
    repeat_clients: list[ClientStat]
    high_value: HighValueSummary
    top_clients: list[ClientStat]
    top_events: list[RankedEvent]
    top_months: list[MonthlyStat]
    busiest_month: MonthlyStat | None
    insights: list[Insight]


@dataclass(frozen=True)
class ComparisonResult:
    start_month: str | None
    end_month: str | None
    months: list[MonthlyStat]
    total_count: int
    total_revenue: float
    average_revenue: float
