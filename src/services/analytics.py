"""
Revenue and operations analytics over finished bookings.

Every report is re-derived from the filtered booking list on each call.
All grouping (month, venue, client) goes through group_and_reduce so the
buckets used by different reports can never disagree.
"""

import math
from typing import Callable, Iterable, TypeVar

from core.config import HIGH_VALUE_FLOOR, HIGH_VALUE_MULTIPLIER, TOP_N, UNTITLED_EVENT
from core.dates import format_date, month_label_long, month_year_key
from core.validation import get_client_name, get_revenue, get_venue, is_finished
from models.events import (
    ClientStat,
    DashboardSnapshot,
    DateRange,
    HighValueSummary,
    Insight,
    Kpis,
    MonthlyStat,
    RankedEvent,
    RevenueTrend,
    VenueSummary,
)
from services.date_range import filter_by_range

T = TypeVar("T")
A = TypeVar("A")


# =============================================================================
# HELPERS
# =============================================================================


def group_and_reduce(
    items: Iterable[T],
    key: Callable[[T], str | None],
    reducer: Callable[[A, T], A],
    initial: Callable[[], A],
) -> dict[str, A]:
    """
    Group items by key and fold each group with reducer.

    initial is a factory so groups never share an accumulator. Items whose
    key is empty or None are skipped. Groups keep first-seen order.
    """
    groups: dict[str, A] = {}
    for item in items:
        group_key = key(item)
        if not group_key:
            continue
        if group_key not in groups:
            groups[group_key] = initial()
        groups[group_key] = reducer(groups[group_key], item)
    return groups


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_currency(value, decimals: int = 0) -> str:
    """US dollar display: 1234.56 -> '$1,235'."""
    amount = value if isinstance(value, (int, float)) and math.isfinite(value) else 0
    text = f"${abs(amount):,.{decimals}f}"
    if amount < 0 and round(abs(amount), decimals) != 0:
        return f"-{text}"
    return text


def _event_month(event: dict) -> str:
    return month_year_key(event.get("eventDate"))


def _ranked(event: dict) -> RankedEvent:
    client = event.get("clientName")
    return RankedEvent(
        id=event.get("id"),
        name=event.get("eventName") or UNTITLED_EVENT,
        client=client.strip() if isinstance(client, str) else "",
        event_date=format_date(event.get("eventDate")),
        revenue=get_revenue(event),
    )


# =============================================================================
# FILTERING
# =============================================================================


def finished_events(events: list[dict]) -> list[dict]:
    """Finished bookings with a parseable eventDate."""
    return [e for e in events if is_finished(e)]


def filtered_events(events: list[dict], date_range: DateRange) -> list[dict]:
    return filter_by_range(finished_events(events), date_range)


# =============================================================================
# KPIS AND VENUES
# =============================================================================


def venue_usage(events: list[dict]) -> dict[str, int]:
    return group_and_reduce(events, get_venue, lambda count, _: count + 1, lambda: 0)


def compute_kpis(events: list[dict]) -> Kpis:
    total_revenue = sum(get_revenue(e) for e in events)
    count = len(events)
    usage = venue_usage(events)

    # Ties go to the venue seen first
    busiest = None
    for venue, venue_count in usage.items():
        if busiest is None or venue_count > usage[busiest]:
            busiest = venue

    return Kpis(
        total_revenue=total_revenue,
        event_count=count,
        average_revenue=total_revenue / count if count else 0.0,
        busiest_venue=busiest,
        venue_usage=usage,
    )


def venue_distribution(events: list[dict]) -> list[tuple[str, int]]:
    """Venue counts, most used first (stable for ties)."""
    return sorted(venue_usage(events).items(), key=lambda item: item[1], reverse=True)


def venue_summary(events: list[dict]) -> VenueSummary | None:
    distribution = venue_distribution(events)
    if not distribution:
        return None

    top_venue, top_count = distribution[0]
    total = sum(count for _, count in distribution)
    return VenueSummary(
        top_venue=top_venue,
        top_count=top_count,
        share_percent=round_half_up(top_count / total * 100) if total else 0,
        runner_up=distribution[1][0] if len(distribution) > 1 else None,
    )


# =============================================================================
# MONTHLY
# =============================================================================


def _add_to_month(acc: dict, event: dict) -> dict:
    acc["count"] += 1
    acc["revenue"] += get_revenue(event)
    venue = get_venue(event)
    acc["venues"][venue] = acc["venues"].get(venue, 0) + 1
    return acc


def monthly_breakdown(events: list[dict]) -> list[MonthlyStat]:
    """Per-month event count, revenue and venue counts, oldest month first."""
    grouped = group_and_reduce(
        events,
        _event_month,
        _add_to_month,
        lambda: {"count": 0, "revenue": 0.0, "venues": {}},
    )
    return [
        MonthlyStat(month_year=key, count=acc["count"], total_revenue=acc["revenue"], venues=acc["venues"])
        for key, acc in sorted(grouped.items())
    ]


def monthly_revenue_series(events: list[dict]) -> list[tuple[str, float]]:
    return [(stat.month_year, stat.total_revenue) for stat in monthly_breakdown(events)]


def revenue_trend(series: list[tuple[str, float]]) -> RevenueTrend | None:
    """
    Month-over-month change between the last two months of the series.

    percent_change is None when the previous month had no revenue (or the
    ratio is too large to represent); only the absolute delta is
    meaningful then.
    """
    if len(series) < 2:
        return None

    (previous_month, previous), (latest_month, latest) = series[-2], series[-1]
    delta = latest - previous
    percent_change = delta / previous * 100 if previous else None
    if percent_change is not None and not math.isfinite(percent_change):
        percent_change = None
    return RevenueTrend(
        latest_month=latest_month,
        previous_month=previous_month,
        delta=delta,
        percent_change=percent_change,
        direction="up" if delta >= 0 else "down",
    )


def busiest_month(monthly: list[MonthlyStat]) -> MonthlyStat | None:
    """Most events; ties go to higher revenue, then to the earlier month."""
    top = None
    for stat in monthly:
        if top is None or stat.count > top.count:
            top = stat
        elif stat.count == top.count and stat.total_revenue > top.total_revenue:
            top = stat
    return top


def top_months(monthly: list[MonthlyStat], n: int = TOP_N) -> list[MonthlyStat]:
    return sorted(monthly, key=lambda stat: stat.total_revenue, reverse=True)[:n]


# =============================================================================
# CLIENTS
# =============================================================================


def _add_to_client(acc: dict, event: dict) -> dict:
    acc["revenue"] += get_revenue(event)
    acc["count"] += 1
    return acc


def client_aggregates(events: list[dict]) -> list[ClientStat]:
    """Revenue and booking count per client (names trimmed), highest revenue first."""
    grouped = group_and_reduce(
        events,
        get_client_name,
        _add_to_client,
        lambda: {"revenue": 0.0, "count": 0},
    )
    clients = [ClientStat(name=name, revenue=acc["revenue"], count=acc["count"]) for name, acc in grouped.items()]
    return sorted(clients, key=lambda c: c.revenue, reverse=True)


def repeat_clients(clients: list[ClientStat]) -> list[ClientStat]:
    return [c for c in clients if c.count > 1]


def top_clients(clients: list[ClientStat], n: int = TOP_N) -> list[ClientStat]:
    return clients[:n]


# =============================================================================
# EVENTS
# =============================================================================


def high_value_events(events: list[dict]) -> HighValueSummary:
    """
    Bookings earning at least max(average x 1.35, 5000).

    Both the threshold and the list are empty when there are no bookings or
    the average is 0.
    """
    if not events:
        return HighValueSummary(threshold=0.0, events=[])

    average = sum(get_revenue(e) for e in events) / len(events)
    if not average:
        return HighValueSummary(threshold=0.0, events=[])

    threshold = max(average * HIGH_VALUE_MULTIPLIER, HIGH_VALUE_FLOOR)
    qualifying = [_ranked(e) for e in events if get_revenue(e) >= threshold]
    qualifying.sort(key=lambda r: r.revenue, reverse=True)
    return HighValueSummary(threshold=threshold, events=qualifying)


def top_events(events: list[dict], n: int = TOP_N) -> list[RankedEvent]:
    """Highest-earning individual bookings, skipping ones with no revenue."""
    ranked = [_ranked(e) for e in events if get_revenue(e) > 0]
    return sorted(ranked, key=lambda r: r.revenue, reverse=True)[:n]


def highest_grossing_event(events: list[dict]) -> RankedEvent | None:
    top = None
    for event in events:
        if top is None or get_revenue(event) > top.revenue:
            top = _ranked(event)
    return top


def insights(month: MonthlyStat | None, top_event: RankedEvent | None) -> list[Insight]:
    items = []

    if month:
        plural = "" if month.count == 1 else "s"
        items.append(
            Insight(
                label="Busiest month in range",
                value=month_label_long(month.month_year),
                description=f"{month.count} event{plural} • {format_currency(month.total_revenue)}",
            )
        )

    if top_event and top_event.revenue > 0:
        when = month_label_long(top_event.event_date[:7]) if top_event.event_date else ""
        description = format_currency(top_event.revenue)
        if when:
            description += f" • {when}"
        items.append(Insight(label="Highest-grossing event", value=top_event.name, description=description))

    return items


# =============================================================================
# DASHBOARD
# =============================================================================


def build_dashboard(events: list[dict], date_range: DateRange) -> DashboardSnapshot:
    """Compute every statistics-view report for the bookings inside date_range."""
    selected = filtered_events(events, date_range)
    monthly = monthly_breakdown(selected)
    series = [(stat.month_year, stat.total_revenue) for stat in monthly]
    clients = client_aggregates(selected)
    busiest = busiest_month(monthly)

    return DashboardSnapshot(
        date_range=date_range,
        kpis=compute_kpis(selected),
        monthly=monthly,
        revenue_series=series,
        trend=revenue_trend(series),
        venues=venue_distribution(selected),
        venue_summary=venue_summary(selected),
        clients=clients,
        repeat_clients=repeat_clients(clients),
        high_value=high_value_events(selected),
        top_clients=top_clients(clients),
        top_events=top_events(selected),
        top_months=top_months(monthly),
        busiest_month=busiest,
        insights=insights(busiest, highest_grossing_event(selected)),
    )
