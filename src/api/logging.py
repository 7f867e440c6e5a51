"""
Request log for the API, kept in SQLite.

Every /v1 request produces one api_requests row plus zero or more
api_request_details rows (validation errors and note warnings).
"""

import sqlite3
import time
import uuid
from contextlib import closing
from dataclasses import dataclass, field
from datetime import datetime, timezone

from core.config import DB_PATH

REQUEST_COLUMNS = (
    "request_id",
    "timestamp",
    "endpoint",
    "method",
    "client_ip",
    "event_count",
    "note_count",
    "preset",
    "view_mode",
    "status_code",
    "error_code",
    "error_message",
    "processing_time_ms",
)


@dataclass
class RequestLog:
    """One API call: what came in, how it ended and how long it took."""

    endpoint: str
    method: str = "POST"
    client_ip: str | None = None
    event_count: int | None = None
    note_count: int | None = None
    preset: str | None = None
    view_mode: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    details: list[tuple[str, str]] = field(default_factory=list)  # (detail_type, message)
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    started: float = field(default_factory=time.perf_counter)

    def warn(self, message: str):
        self.details.append(("warning", message))

    def finish(self, status_code: int, error_code: str | None = None, error_message: str | None = None):
        self.status_code = status_code
        self.error_code = error_code
        self.error_message = error_message
        self.processing_time_ms = int((time.perf_counter() - self.started) * 1000)

    def row(self) -> tuple:
        return tuple(getattr(self, column) for column in REQUEST_COLUMNS)


def log_request(log: RequestLog) -> None:
    """Write one request and its details in a single transaction."""
    placeholders = ", ".join("?" for _ in REQUEST_COLUMNS)
    with closing(sqlite3.connect(DB_PATH)) as conn, conn:
        conn.execute(
            f"INSERT INTO api_requests ({', '.join(REQUEST_COLUMNS)}) VALUES ({placeholders})",
            log.row(),
        )
        conn.executemany(
            "INSERT INTO api_request_details (request_id, detail_type, message) VALUES (?, ?, ?)",
            [(log.request_id, detail_type, message) for detail_type, message in log.details],
        )


def count_requests() -> int | None:
    """Number of logged requests, or None when the log tables can't be read."""
    if not DB_PATH.exists():
        return None
    try:
        with closing(sqlite3.connect(DB_PATH)) as conn:
            (count,) = conn.execute("SELECT COUNT(*) FROM api_requests").fetchone()
    except sqlite3.Error:
        return None
    return count
