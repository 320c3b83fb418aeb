from __future__ import annotations

import sqlite3
from datetime import UTC, datetime
from pathlib import Path

from mealime_pipeline.application.ports.cookie_storage_port import CookieStoragePort, StorageWriteError
from mealime_pipeline.domain.errors import StorageCorrupt

SCHEMA = """
CREATE TABLE IF NOT EXISTS mealime_cookie_jar (
  id INTEGER PRIMARY KEY CHECK (id = 1),
  payload TEXT NOT NULL,
  saved_at TEXT NOT NULL
);
"""


class SQLiteCookieStorage(CookieStoragePort):
    """SQLite-backed cookie jar record. Survives restarts like the JSON file.

    File path configurable; creates schema on first use.
    """

    def __init__(self, db_path: str = ".mealime_cookies.sqlite") -> None:
        self._path = Path(db_path)
        # shared by API worker threads; callers serialize access
        self._conn = sqlite3.connect(self._path, check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.executescript(SCHEMA)
        self._conn.commit()

    def read(self) -> str | None:
        try:
            row = self._conn.execute(
                "SELECT payload FROM mealime_cookie_jar WHERE id=1"
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageCorrupt(f"unknown cookie jar loading error: {e}") from e
        return row[0] if row else None

    def write(self, payload: str) -> None:
        try:
            self._conn.execute(
                "INSERT INTO mealime_cookie_jar (id, payload, saved_at) VALUES (1, ?, ?) "
                "ON CONFLICT(id) DO UPDATE SET payload=excluded.payload, saved_at=excluded.saved_at",
                (payload, datetime.now(UTC).isoformat()),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise StorageWriteError(str(e)) from e

    def clear(self) -> None:
        try:
            self._conn.execute("DELETE FROM mealime_cookie_jar WHERE id=1")
            self._conn.commit()
        except sqlite3.Error as e:
            raise StorageWriteError(str(e)) from e

    def close(self) -> None:
        self._conn.close()
