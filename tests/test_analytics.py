"""Tests for services.analytics."""

import math
from datetime import date

import pytest

from fixtures.generate_events import generate_bookings
from models.events import DateRange
from services.analytics import (
    busiest_month,
    build_dashboard,
    client_aggregates,
    compute_kpis,
    filtered_events,
    finished_events,
    format_currency,
    group_and_reduce,
    high_value_events,
    highest_grossing_event,
    insights,
    monthly_breakdown,
    monthly_revenue_series,
    repeat_clients,
    revenue_trend,
    top_clients,
    top_events,
    top_months,
    venue_distribution,
    venue_summary,
)
from services.date_range import resolve_preset


def finished(date_str, total, **fields):
    return {"status": "finished", "eventDate": date_str, "grandTotal": total, **fields}


class TestGroupAndReduce:
    def test_counts_in_first_seen_order(self):
        groups = group_and_reduce(["b", "a", "b", "c"], lambda x: x, lambda n, _: n + 1, lambda: 0)
        assert list(groups.items()) == [("b", 2), ("a", 1), ("c", 1)]

    def test_skips_empty_keys(self):
        groups = group_and_reduce([1, 2, 3], lambda x: "odd" if x % 2 else "", lambda n, _: n + 1, lambda: 0)
        assert groups == {"odd": 2}

    def test_accumulators_are_not_shared(self):
        groups = group_and_reduce(["a", "b"], lambda x: x, lambda acc, x: acc + [x], list)
        assert groups == {"a": ["a"], "b": ["b"]}


class TestFiltering:
    def test_only_dated_finished_events(self, sample_events):
        assert [e["id"] for e in finished_events(sample_events)] == ["evt-1", "evt-2", "evt-3", "evt-4"]

    def test_unparseable_date_is_skipped(self):
        events = [finished("someday", 100), finished("2025-01-10", 100)]
        assert len(finished_events(events)) == 1
        assert [s.month_year for s in monthly_breakdown(events)] == ["2025-01"]

    def test_date_range_applied_after_status(self, sample_events, today):
        selected = filtered_events(sample_events, resolve_preset("thisMonth", today))
        assert [e["id"] for e in selected] == ["evt-1"]


class TestKpis:
    def test_totals_and_busiest_venue(self, sample_events):
        kpis = compute_kpis(finished_events(sample_events))
        assert kpis.total_revenue == 19000
        assert kpis.event_count == 4
        assert kpis.average_revenue == 4750
        assert kpis.busiest_venue == "Main Hall"
        assert kpis.venue_usage == {"Main Hall": 2, "Garden": 1, "Unknown": 1}

    def test_busiest_venue_tie_goes_to_first_seen(self):
        events = [
            finished("2025-01-01", 1, buildingArea="Terrace"),
            finished("2025-01-02", 1, buildingArea="Garden"),
            finished("2025-01-03", 1, buildingArea="Garden"),
            finished("2025-01-04", 1, buildingArea="Terrace"),
        ]
        assert compute_kpis(events).busiest_venue == "Terrace"

    def test_empty(self):
        kpis = compute_kpis([])
        assert kpis.total_revenue == 0
        assert kpis.average_revenue == 0
        assert kpis.busiest_venue is None

    def test_average_and_high_value_threshold(self):
        events = [finished("2025-01-01", 100), finished("2025-01-02", "200"), finished("2025-01-03", 300.0)]
        assert compute_kpis(events).average_revenue == 200
        summary = high_value_events(events)
        assert summary.threshold == 5000
        assert summary.events == []

    def test_non_numeric_money_never_poisons_sums(self):
        events = [finished("2025-01-01", "abc"), finished("2025-01-02", float("nan")), finished("2025-01-03", 50)]
        assert compute_kpis(events).total_revenue == 50

    def test_oversized_amounts_keep_every_total_finite(self):
        events = [
            finished("2025-01-01", "1e308", clientName="Acme"),
            finished("2025-01-02", 1e308, clientName="Acme"),
            finished("2025-02-03", 10**400, clientName="Acme"),
            finished("2025-02-04", 1e12, clientName="Blue Harbor"),
            finished("2025-02-05", -1e12),
        ]
        snapshot = build_dashboard(events, DateRange())

        assert snapshot.kpis.total_revenue == 0
        assert [s.total_revenue for s in snapshot.monthly] == [0, 0]
        assert {c.name: c.revenue for c in snapshot.clients}["Blue Harbor"] == 1e12
        values = [snapshot.kpis.total_revenue, snapshot.kpis.average_revenue, snapshot.high_value.threshold]
        values += [c.revenue for c in snapshot.clients] + [r.revenue for r in snapshot.top_events]
        assert all(math.isfinite(v) for v in values)


class TestMonthly:
    def test_series_and_trend(self):
        events = [finished("2025-01-10", 1000), finished("2025-02-15", 2000)]
        series = monthly_revenue_series(events)
        assert series == [("2025-01", 1000), ("2025-02", 2000)]

        trend = revenue_trend(series)
        assert trend.direction == "up"
        assert trend.percent_change == 100
        assert trend.delta == 1000

    def test_series_sorted_regardless_of_input_order(self):
        events = [finished("2025-11-01", 1), finished("2024-12-31", 2), finished("2025-02-01", 3)]
        assert [k for k, _ in monthly_revenue_series(events)] == ["2024-12", "2025-02", "2025-11"]

    def test_trend_from_zero_month_has_no_percent(self):
        trend = revenue_trend([("2025-01", 0), ("2025-02", 500)])
        assert trend.percent_change is None
        assert trend.delta == 500
        assert trend.direction == "up"

    def test_trend_percent_too_large_to_represent(self):
        trend = revenue_trend([("2025-01", 1e-320), ("2025-02", 1e12)])
        assert trend.percent_change is None
        assert trend.direction == "up"

    def test_flat_trend_counts_as_up_and_drop_as_down(self):
        assert revenue_trend([("2025-01", 500), ("2025-02", 500)]).direction == "up"
        down = revenue_trend([("2025-01", 400), ("2025-02", 100)])
        assert down.direction == "down"
        assert down.percent_change == -75

    def test_trend_needs_two_months(self):
        assert revenue_trend([]) is None
        assert revenue_trend([("2025-01", 10)]) is None

    def test_breakdown_matches_series(self, sample_events):
        events = finished_events(sample_events)
        breakdown = monthly_breakdown(events)
        assert [(s.month_year, s.total_revenue) for s in breakdown] == monthly_revenue_series(events)
        assert sum(s.count for s in breakdown) == len(events)

        february = breakdown[1]
        assert february.month_year == "2025-02"
        assert february.count == 2
        assert february.venues == {"Garden": 1, "Unknown": 1}

    def test_busiest_month_tie_broken_by_revenue(self):
        events = [
            finished("2025-01-01", 100),
            finished("2025-01-02", 100),
            finished("2025-02-01", 150),
            finished("2025-02-02", 100),
            finished("2025-03-01", 9000),
        ]
        month = busiest_month(monthly_breakdown(events))
        assert month.month_year == "2025-02"
        assert busiest_month([]) is None

    def test_top_months_truncated(self):
        events = [finished(f"2025-{m:02d}-01", m * 100) for m in range(1, 7)]
        ranked = top_months(monthly_breakdown(events))
        assert [s.month_year for s in ranked] == ["2025-06", "2025-05", "2025-04", "2025-03"]
        assert len(top_months(monthly_breakdown(events[:2]))) == 2


class TestVenues:
    def test_distribution_sorted_by_count(self, sample_events):
        assert venue_distribution(finished_events(sample_events)) == [("Main Hall", 2), ("Garden", 1), ("Unknown", 1)]

    def test_summary_share_and_runner_up(self, sample_events):
        summary = venue_summary(finished_events(sample_events))
        assert summary.top_venue == "Main Hall"
        assert summary.share_percent == 50
        assert summary.runner_up == "Garden"

    def test_summary_rounds_half_up(self):
        events = [finished("2025-01-01", 1, buildingArea="A")] + [
            finished("2025-01-01", 1, buildingArea=f"V{i}") for i in range(7)
        ]
        # 1 of 8 = 12.5%
        assert venue_summary(events).share_percent == 13

    def test_single_venue_has_no_runner_up(self):
        assert venue_summary([finished("2025-01-01", 1, buildingArea="Garden")]).runner_up is None
        assert venue_summary([]) is None


class TestClients:
    def test_trim_then_merge(self):
        events = [finished("2025-01-01", 500, clientName=" Acme "), finished("2025-01-02", 300, clientName="Acme")]
        clients = client_aggregates(events)
        assert len(clients) == 1
        assert clients[0].name == "Acme"
        assert clients[0].revenue == 800
        assert clients[0].count == 2

    def test_blank_names_grouped_as_unnamed(self):
        events = [finished("2025-01-01", 10, clientName="  "), finished("2025-01-02", 20)]
        clients = client_aggregates(events)
        assert [(c.name, c.count) for c in clients] == [("Unnamed Client", 2)]

    def test_sorted_by_revenue_and_repeat_clients(self, sample_events):
        clients = client_aggregates(finished_events(sample_events))
        assert [c.name for c in clients] == ["Blue Harbor", "Acme Corp", "Unnamed Client"]
        assert [c.name for c in repeat_clients(clients)] == ["Acme Corp"]

    def test_top_clients_truncated_not_padded(self):
        events = [finished("2025-01-01", i, clientName=f"C{i}") for i in range(1, 7)]
        assert [c.name for c in top_clients(client_aggregates(events))] == ["C6", "C5", "C4", "C3"]
        assert len(top_clients(client_aggregates(events[:1]))) == 1


class TestEvents:
    def test_high_value_threshold_uses_multiplier(self, sample_events):
        summary = high_value_events(finished_events(sample_events))
        assert summary.threshold == pytest.approx(4750 * 1.35)
        assert [e.id for e in summary.events] == ["evt-3"]

    def test_high_value_boundary_is_inclusive(self):
        events = [finished("2025-01-01", 5000), finished("2025-01-02", 1000)]
        summary = high_value_events(events)
        assert summary.threshold == 5000
        assert [e.revenue for e in summary.events] == [5000]

    def test_high_value_empty_cases(self):
        assert high_value_events([]).threshold == 0
        zero = high_value_events([finished("2025-01-01", "")])
        assert zero.threshold == 0
        assert zero.events == []

    def test_top_events_excludes_zero_revenue(self, sample_events):
        ranked = top_events(finished_events(sample_events))
        assert [e.id for e in ranked] == ["evt-3", "evt-1", "evt-2"]
        assert ranked[0].name == "Board Retreat"

    def test_highest_grossing_first_wins_ties(self):
        events = [
            finished("2025-01-01", 700, id="a", eventName="First"),
            finished("2025-01-02", 700, id="b", eventName="Second"),
        ]
        assert highest_grossing_event(events).id == "a"
        assert highest_grossing_event([]) is None

    def test_untitled_event_name(self):
        assert top_events([finished("2025-01-01", 10)])[0].name == "Untitled Event"


class TestInsights:
    def test_busiest_month_and_highest_grossing(self, sample_events):
        events = finished_events(sample_events)
        items = insights(busiest_month(monthly_breakdown(events)), highest_grossing_event(events))

        assert [i.label for i in items] == ["Busiest month in range", "Highest-grossing event"]
        assert items[0].value == "February 2025"
        assert items[0].description == "2 events • $2,500"
        assert items[1].value == "Board Retreat"
        assert items[1].description == "$12,000 • January 2025"

    def test_zero_revenue_event_is_not_an_insight(self):
        events = [finished("2025-01-01", 0)]
        items = insights(busiest_month(monthly_breakdown(events)), highest_grossing_event(events))
        assert [i.label for i in items] == ["Busiest month in range"]
        assert items[0].description == "1 event • $0"

    def test_format_currency(self):
        assert format_currency(1234.56) == "$1,235"
        assert format_currency(1234.5, 2) == "$1,234.50"
        assert format_currency(-20) == "-$20"
        assert format_currency(float("inf")) == "$0"


class TestDashboard:
    def test_all_time_snapshot(self, sample_events):
        snapshot = build_dashboard(sample_events, DateRange())

        assert snapshot.kpis.event_count == 4
        assert [s.month_year for s in snapshot.monthly] == ["2025-01", "2025-02", "2025-03"]
        assert snapshot.trend.percent_change == pytest.approx(80)
        assert snapshot.busiest_month.month_year == "2025-02"
        assert [c.name for c in snapshot.repeat_clients] == ["Acme Corp"]
        assert [s.month_year for s in snapshot.top_months] == ["2025-01", "2025-03", "2025-02"]
        assert len(snapshot.insights) == 2

    def test_empty_range(self, sample_events):
        snapshot = build_dashboard(sample_events, resolve_preset("thisYear", date(2030, 6, 1)))

        assert snapshot.kpis.event_count == 0
        assert snapshot.monthly == []
        assert snapshot.trend is None
        assert snapshot.venue_summary is None
        assert snapshot.high_value.threshold == 0
        assert snapshot.insights == []

    def test_generated_bookings_are_consistent(self):
        bookings = generate_bookings(300, date(2024, 1, 1), date(2025, 12, 31))
        snapshot = build_dashboard(bookings, DateRange())

        assert sum(s.count for s in snapshot.monthly) == snapshot.kpis.event_count
        assert sum(s.total_revenue for s in snapshot.monthly) == pytest.approx(snapshot.kpis.total_revenue)
        assert sum(c.count for c in snapshot.clients) == snapshot.kpis.event_count
        assert sum(count for _, count in snapshot.venues) == snapshot.kpis.event_count
        for stat in snapshot.monthly:
            assert sum(stat.venues.values()) == stat.count
        assert all(e.revenue >= snapshot.high_value.threshold for e in snapshot.high_value.events)
