"""Tests for services.workflow."""

import pytest

from services.workflow import (
    available_years,
    events_by_status,
    finished_in_month,
    move_event,
    next_status,
    previous_status,
    sort_upcoming,
)


def test_status_steps():
    assert next_status("pending") == "upcoming"
    assert next_status("maybe") == "upcoming"
    assert next_status("upcoming") == "finished"
    assert next_status("finished") is None
    assert previous_status("finished") == "upcoming"
    assert previous_status("upcoming") == "pending"
    assert previous_status("pending") is None
    assert next_status("bogus") is None


class TestMoveEvent:
    def test_returns_copy(self, sample_event, today):
        moved = move_event(sample_event, "upcoming", today)
        assert moved["status"] == "upcoming"
        assert sample_event["status"] == "finished"

    def test_finishing_undated_event_uses_today(self, today):
        moved = move_event({"id": "x", "status": "upcoming", "eventDate": ""}, "finished", today)
        assert moved["eventDate"] == "2025-03-12"

    def test_finishing_with_bad_date_uses_today(self, today):
        moved = move_event({"id": "x", "status": "upcoming", "eventDate": "TBD"}, "finished", today)
        assert moved["eventDate"] == "2025-03-12"

    def test_existing_date_is_kept(self, today):
        moved = move_event({"id": "x", "status": "upcoming", "eventDate": "2025-01-02"}, "finished", today)
        assert moved["eventDate"] == "2025-01-02"

    def test_unknown_status(self, sample_event, today):
        with pytest.raises(ValueError):
            move_event(sample_event, "archived", today)


def test_events_by_status_reads_legacy_pending(sample_events):
    assert [e["id"] for e in events_by_status(sample_events, "pending")] == ["evt-6"]


def test_sort_upcoming_puts_undated_last():
    events = [
        {"id": "c", "eventDate": ""},
        {"id": "b", "eventDate": "2025-05-01"},
        {"id": "a", "eventDate": "2025-04-30"},
    ]
    assert [e["id"] for e in sort_upcoming(events)] == ["a", "b", "c"]


def test_finished_in_month(sample_events):
    assert [e["id"] for e in finished_in_month(sample_events, 2025, 2)] == ["evt-2", "evt-4"]
    assert len(finished_in_month(sample_events)) == 5
    assert finished_in_month(sample_events, 2024, 2) == []


def test_available_years(sample_events):
    events = sample_events + [{"status": "finished", "eventDate": "2023-06-01"}]
    assert available_years(events) == [2023, 2025]
