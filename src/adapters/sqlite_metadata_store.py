"""SQLite metadata adapter.

Implements the core MetadataStore port using a simple SQLite database, plus
an append-only exposure log used by the experiment feature adapter.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from nudge.models import Metadata


class SQLiteMetadataStore:
    """Thin SQLite wrapper that satisfies the MetadataStore contract."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - message_metadata: per-message display state, one row per id
        - exposures: append-only log of experiment exposures
        """

        with self._connect() as conn:
            # Fields:
            # - id: message id from the remote catalog (PRIMARY KEY)
            # - display_count: number of times the message was shown
            # - pressed / dismissed: 0 or 1
            # - last_time_shown: ISO timestamp, NULL until first display
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS message_metadata (
                    id TEXT PRIMARY KEY,
                    display_count INTEGER NOT NULL DEFAULT 0,
                    pressed INTEGER NOT NULL DEFAULT 0,
                    dismissed INTEGER NOT NULL DEFAULT 0,
                    last_time_shown TIMESTAMP
                )
                """
            )
            # Fields:
            # - id: auto-increment primary key
            # - experiment_id: active experiment identifier at exposure time
            # - recorded_at: UTC timestamp of the exposure
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS exposures (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    experiment_id TEXT,
                    recorded_at TIMESTAMP NOT NULL
                )
                """
            )

    def get_metadata(self) -> List[Metadata]:
        """Return all metadata rows in insertion order."""

        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT id, display_count, pressed, dismissed, last_time_shown
                FROM message_metadata
                ORDER BY rowid
                """
            ).fetchall()
        return [_row_to_metadata(row) for row in rows]

    def update_metadata(self, entry: Metadata) -> None:
        """Upsert one metadata row in a single transaction."""

        last_time_shown = entry.last_time_shown.isoformat() if entry.last_time_shown else None
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO message_metadata (id, display_count, pressed, dismissed, last_time_shown)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    display_count = excluded.display_count,
                    pressed = excluded.pressed,
                    dismissed = excluded.dismissed,
                    last_time_shown = excluded.last_time_shown
                """,
                (
                    entry.id,
                    entry.display_count,
                    int(entry.pressed),
                    int(entry.dismissed),
                    last_time_shown,
                ),
            )

    def save_exposure(self, experiment_id: Optional[str]) -> None:
        """Append one exposure event to the log."""

        now = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO exposures (experiment_id, recorded_at) VALUES (?, ?)",
                (experiment_id, now.isoformat()),
            )

    def list_exposures(self) -> List[Tuple[Optional[str], datetime]]:
        """Return (experiment_id, recorded_at) pairs, oldest first."""

        with self._connect() as conn:
            rows = conn.execute(
                "SELECT experiment_id, recorded_at FROM exposures ORDER BY id"
            ).fetchall()
        return [(row["experiment_id"], datetime.fromisoformat(row["recorded_at"])) for row in rows]


def _row_to_metadata(row: sqlite3.Row) -> Metadata:
    last_time_shown = row["last_time_shown"]
    return Metadata(
        id=row["id"],
        display_count=int(row["display_count"]),
        pressed=bool(row["pressed"]),
        dismissed=bool(row["dismissed"]),
        last_time_shown=datetime.fromisoformat(last_time_shown) if last_time_shown else None,
    )
