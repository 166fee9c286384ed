"""SQLite request logging for API."""

import sqlite3
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from core import config
from core.database import get_connection, init_request_log_schema
from models.assignments import EngineError

REQUEST_COLUMNS = (
    "request_id",
    "timestamp",
    "endpoint",
    "method",
    "client_ip",
    "file_size_bytes",
    "file_name",
    "reference_date_override",
    "status_code",
    "error_code",
    "error_message",
    "processing_time_ms",
    "pairs_found",
    "errors_collected",
)


@dataclass
class RequestLog:
    """One upload request: metadata, outcome and the row errors the engine collected."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    file_size_bytes: int | None = None
    file_name: str | None = None
    reference_date_override: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    pairs_found: int | None = None
    errors_collected: int | None = None
    engine_errors: list[EngineError] = field(default_factory=list)


def _insert_request(cursor: sqlite3.Cursor, log: RequestLog) -> None:
    placeholders = ", ".join("?" for _ in REQUEST_COLUMNS)
    cursor.execute(
        f"INSERT INTO api_requests ({', '.join(REQUEST_COLUMNS)}) VALUES ({placeholders})",
        tuple(getattr(log, column) for column in REQUEST_COLUMNS),
    )


def _insert_engine_errors(
    cursor: sqlite3.Cursor, request_id: str, errors: list[EngineError]
) -> None:
    # Only the kind and message are kept; raw row content is not persisted
    cursor.executemany(
        "INSERT INTO api_request_details (request_id, detail_type, message) VALUES (?, ?, ?)",
        [(request_id, error.kind.value, error.message) for error in errors],
    )


def log_request(log: RequestLog, db_path: Path | None = None) -> None:
    """Write a request and its engine errors to the request-log database."""
    conn = get_connection(db_path or config.DB_PATH)
    try:
        init_request_log_schema(conn)
        cursor = conn.cursor()
        _insert_request(cursor, log)
        _insert_engine_errors(cursor, log.request_id, log.engine_errors)
        conn.commit()
    finally:
        conn.close()
