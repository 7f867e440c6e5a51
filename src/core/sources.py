"""
Read-only snapshot sources for bookings and calendar notes.

The real store (and every create/update/delete) lives outside this
project. Anything exposing list_events() and list_calendar_notes() can
feed the calendar and analytics.
"""

import json
from pathlib import Path
from typing import Protocol

from models.events import CalendarNote, Event


class EventSource(Protocol):
    def list_events(self) -> list[Event]: ...

    def list_calendar_notes(self) -> list[CalendarNote]: ...


class InMemorySource:
    """Holds a fixed snapshot; list_* return copies so callers can't mutate it."""

    def __init__(self, events: list[Event] | None = None, notes: list[CalendarNote] | None = None):
        self._events = [dict(e) for e in events or []]
        self._notes = [dict(n) for n in notes or []]

    def list_events(self) -> list[Event]:
        return [dict(e) for e in self._events]

    def list_calendar_notes(self) -> list[CalendarNote]:
        return [dict(n) for n in self._notes]


class JsonFileSource:
    """
    Snapshot exported to a JSON file.

    Expected shape: {"events": [...], "notes": [...]}. A bare list is read
    as the events array. The file is re-read on every call so a refreshed
    export is picked up without restarting.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> dict:
        with self.path.open(encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, list):
            return {"events": data, "notes": []}
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected snapshot format in {self.path}")
        return data

    def list_events(self) -> list[Event]:
        return list(self._load().get("events") or [])

    def list_calendar_notes(self) -> list[CalendarNote]:
        return list(self._load().get("notes") or [])
