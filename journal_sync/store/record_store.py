"""SQLite-backed record store partitioned by application id.

Every record lives in the ``entries`` table keyed by ``(app_id, uuid)``.
Writes come in two flavours: a full replace used when a client commits an
edit, and a conditional insert used during reconciliation that never touches
an existing row.
"""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path
from typing import Optional

from loguru import logger

from journal_sync.errors import StoreError
from journal_sync.models import Record, opaque_scalar
from journal_sync.store.tags import decode_tags, encode_tags

_COLUMNS = "uuid, app_id, content, category, tags, date, date_iso, timestamp"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS entries (
    uuid TEXT NOT NULL,
    app_id TEXT NOT NULL,
    content TEXT,
    category TEXT,
    tags TEXT,
    date,
    date_iso,
    timestamp,
    PRIMARY KEY (app_id, uuid)
)
"""

_INDEX = """
CREATE INDEX IF NOT EXISTS idx_entries_app_timestamp
ON entries(app_id, timestamp)
"""


class RecordStore:
    """Durable keyed storage with partition-scoped queries.

    Args:
        db_path: Path to the SQLite database file. ``":memory:"`` keeps the
            table in memory for the lifetime of the store (useful for tests).
    """

    MEMORY = ":memory:"

    def __init__(self, db_path: str | Path = MEMORY) -> None:
        self.db_path = str(db_path)
        self._lock = threading.Lock()
        if self.db_path != self.MEMORY:
            Path(self.db_path).expanduser().parent.mkdir(parents=True, exist_ok=True)
            self.db_path = str(Path(self.db_path).expanduser())
        try:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            with self._conn:
                self._conn.execute(_SCHEMA)
                self._conn.execute(_INDEX)
        except sqlite3.Error as e:
            logger.error("Could not open record store at {}: {}", self.db_path, e)
            raise StoreError(str(e)) from e
        logger.debug("Record store ready at {}", self.db_path)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _record_from_row(row: sqlite3.Row) -> Record:
        return Record(
            id=row["uuid"],
            app_id=row["app_id"],
            content=row["content"] if row["content"] is not None else "",
            category=row["category"] or "",
            tags=decode_tags(row["tags"]),
            date=row["date"],
            date_iso=row["date_iso"],
            timestamp=row["timestamp"],
        )

    @staticmethod
    def _record_to_params(r: Record) -> tuple:
        return (
            r.id,
            r.app_id,
            r.content,
            r.category or "",
            encode_tags(r.tags),
            opaque_scalar(r.date),
            opaque_scalar(r.date_iso),
            opaque_scalar(r.timestamp),
        )

    def _write(self, verb: str, record: Record) -> int:
        sql = f"{verb} INTO entries ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)"
        try:
            with self._lock, self._conn:
                cursor = self._conn.execute(sql, self._record_to_params(record))
                return cursor.rowcount
        except (sqlite3.Error, OverflowError) as e:
            logger.error("{} failed for {}/{}: {}", verb, record.app_id, record.id, e)
            raise StoreError(str(e)) from e

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_by_partition(self, app_id: str) -> list[Record]:
        """Return every record of ``app_id``, newest ``timestamp`` first."""
        try:
            with self._lock:
                rows = self._conn.execute(
                    f"SELECT {_COLUMNS} FROM entries WHERE app_id = ? ORDER BY timestamp DESC",
                    (app_id,),
                ).fetchall()
        except sqlite3.Error as e:
            logger.error("Listing partition {} failed: {}", app_id, e)
            raise StoreError(str(e)) from e
        return [self._record_from_row(row) for row in rows]

    def get(self, app_id: str, record_id: str) -> Optional[Record]:
        """Look up one record by key. Returns None if not found."""
        try:
            with self._lock:
                row = self._conn.execute(
                    f"SELECT {_COLUMNS} FROM entries WHERE app_id = ? AND uuid = ?",
                    (app_id, record_id),
                ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        return self._record_from_row(row) if row is not None else None

    def count(self, app_id: str) -> int:
        """Return the number of records stored under ``app_id``."""
        try:
            with self._lock:
                row = self._conn.execute(
                    "SELECT COUNT(*) AS n FROM entries WHERE app_id = ?", (app_id,)
                ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        return row["n"]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def upsert_replace(self, record: Record) -> None:
        """Write ``record``, fully replacing any row with the same key."""
        self._write("INSERT OR REPLACE", record)
        logger.debug("Replaced {}/{}", record.app_id, record.id)

    def upsert_if_absent(self, record: Record) -> bool:
        """Insert ``record`` unless its key already exists.

        The existence check and the insert are one statement, so two writers
        racing on the same new key cannot both win. Returns True when a row
        was inserted and False when the key was already taken.
        """
        inserted = self._write("INSERT OR IGNORE", record) == 1
        if inserted:
            logger.debug("Inserted {}/{}", record.app_id, record.id)
        return inserted

    def close(self) -> None:
        """Close the underlying connection."""
        with self._lock:
            self._conn.close()
