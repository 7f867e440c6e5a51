#!/usr/bin/env python3
"""
Create the SQLite database that holds the API request log.

Usage:
    python src/scripts/init_db.py
    python src/scripts/init_db.py --db-path /tmp/booking-insights.db --reset
"""

import argparse
import sqlite3
import sys
from contextlib import closing
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS api_requests (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        request_id TEXT UNIQUE NOT NULL,
        timestamp TEXT NOT NULL,
        endpoint TEXT NOT NULL,
        method TEXT NOT NULL,
        client_ip TEXT,
        event_count INTEGER,
        note_count INTEGER,
        preset TEXT,
        view_mode TEXT,
        status_code INTEGER NOT NULL,
        error_code TEXT,
        error_message TEXT,
        processing_time_ms INTEGER NOT NULL
    )
    """,
    # One row per validation error or note warning
    """
    CREATE TABLE IF NOT EXISTS api_request_details (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        request_id TEXT NOT NULL,
        detail_type TEXT NOT NULL CHECK(detail_type IN ('validation_error', 'warning')),
        message TEXT NOT NULL,
        FOREIGN KEY (request_id) REFERENCES api_requests(request_id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp)",
    "CREATE INDEX IF NOT EXISTS idx_api_requests_endpoint_status ON api_requests(endpoint, status_code)",
    "CREATE INDEX IF NOT EXISTS idx_api_request_details_request ON api_request_details(request_id)",
]

DROP = [
    "DROP TABLE IF EXISTS api_request_details",
    "DROP TABLE IF EXISTS api_requests",
]


def create_database(db_path: Path = DB_PATH, reset: bool = False):
    """Create the log tables if they don't exist; reset drops them first."""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with closing(sqlite3.connect(db_path)) as conn, conn:
        conn.execute("PRAGMA foreign_keys = ON")
        for statement in (DROP if reset else []) + SCHEMA:
            conn.execute(statement)

    print(f"Database {'reset' if reset else 'ready'} at: {db_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the API request log database")
    parser.add_argument("--db-path", type=Path, default=DB_PATH, help=f"SQLite file (default: {DB_PATH})")
    parser.add_argument("--reset", action="store_true", help="Drop existing log tables first")
    args = parser.parse_args()

    create_database(args.db_path, args.reset)
