"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def today():
    """Fixed 'current date' so presets and calendar flags are deterministic."""
    return date(2025, 3, 12)


@pytest.fixture
def sample_event():
    """Sample finished booking for testing."""
    return {
        "id": "evt-1",
        "status": "finished",
        "eventDate": "2025-03-08",
        "startTime": "17:00",
        "endTime": "23:30",
        "allDay": False,
        "clientName": "Acme Corp",
        "eventName": "Spring Gala",
        "buildingArea": "Main Hall",
        "notes": "",
        "priceGiven": "4500",
        "downPaymentRequired": "1000",
        "downPaymentReceived": True,
        "amountDueAfter": "3500",
        "amountPaidAfter": "",
        "grandTotal": "4500",
        "securityDeposit": "500",
        "files": [],
    }


@pytest.fixture
def sample_events(sample_event):
    """Mixed bookings across statuses, months and venues."""
    return [
        sample_event,
        {
            **sample_event,
            "id": "evt-2",
            "eventDate": "2025-02-14",
            "clientName": " Acme Corp ",
            "eventName": "Valentine Dinner",
            "buildingArea": "Garden",
            "grandTotal": 2500,
        },
        {
            **sample_event,
            "id": "evt-3",
            "eventDate": "2025-01-20",
            "clientName": "Blue Harbor",
            "eventName": "Board Retreat",
            "buildingArea": "Main Hall",
            "grandTotal": "12000",
        },
        {
            **sample_event,
            "id": "evt-4",
            "eventDate": "2025-02-02",
            "clientName": "",
            "eventName": "Walk-in Party",
            "buildingArea": "",
            "grandTotal": "not a number",
        },
        {
            **sample_event,
            "id": "evt-5",
            "status": "upcoming",
            "eventDate": "2025-03-20",
            "eventName": "Product Launch",
            "grandTotal": "9000",
        },
        {
            **sample_event,
            "id": "evt-6",
            "status": "maybe",
            "eventDate": "2025-03-21",
            "eventName": "Maybe Wedding",
            "grandTotal": "",
        },
        {
            **sample_event,
            "id": "evt-7",
            "eventDate": "",
            "eventName": "Undated",
            "grandTotal": "800",
        },
    ]


@pytest.fixture
def sample_notes():
    return [
        {"id": "note-1", "title": "Deep clean", "content": "Main Hall carpets", "color": "blue", "date": "2025-03-08"},
        {"id": "note-2", "title": "Staff meeting", "color": "green", "date": "2025-03-20"},
    ]


@pytest.fixture
def log_db(tmp_path, monkeypatch):
    """Request-log database in a temp directory."""
    from scripts.init_db import create_database

    db_path = tmp_path / "booking-insights.db"
    create_database(db_path)
    monkeypatch.setattr("api.logging.DB_PATH", db_path)
    return db_path
