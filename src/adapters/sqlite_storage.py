"""SQLite storage adapter.

Implements the core PersistencePort using a simple SQLite database.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Optional


class SQLiteStorage:
    """Thin SQLite wrapper that satisfies the PersistencePort contract."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - kv_store: one serialized JSON blob per namespaced key
        """

        with self._connect() as conn:
            # kv_store mirrors a browser-style key/value store. Values are
            # opaque to this adapter; the core decides what goes in them.
            # Fields:
            # - key: namespaced key such as "notifications" (PRIMARY KEY)
            # - value: serialized JSON text
            # - updated_at: timestamp of the last write, for debugging
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
                """
            )

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, if any."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?",
                (key,),
            ).fetchone()
        return str(row["value"]) if row else None

    def set(self, key: str, value: str) -> None:
        """Upsert the value for key. The last writer wins."""

        now = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, now.isoformat()),
            )

    def delete(self, key: str) -> bool:
        """Remove key and return whether it existed."""

        with self._connect() as conn:
            cur = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            return cur.rowcount > 0

    def keys(self) -> set[str]:
        """Return every key currently stored."""

        with self._connect() as conn:
            rows = conn.execute("SELECT key FROM kv_store").fetchall()
        return {row["key"] for row in rows}
