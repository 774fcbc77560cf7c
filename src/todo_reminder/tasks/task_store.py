# src/todo_reminder/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from ..errors import PersistenceWriteFailed
from .task_models import Task, task_from_record, task_to_record

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todo_mvp_tasks_v1"


class LoadStatus(StrEnum):
    OK = "ok"
    MISSING = "missing"
    CORRUPT = "corrupt"


@dataclass(frozen=True, slots=True)
class LoadResult:
    tasks: list[Task] = field(default_factory=list)
    status: LoadStatus = LoadStatus.MISSING


class TaskStore:
    """
    SQLite key-value store holding the whole task collection in one slot.

    The slot value is a JSON array of task records. There is no versioning:
    anything that does not decode into well-formed records is treated as corrupt
    and loads as an empty collection.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3", *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._key = key
        self._ensure_schema()
        logger.info("TaskStore ready db=%s key=%s", self._db_path, self._key)

    @property
    def key(self) -> str:
        return self._key

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def _read_raw(self) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (self._key,)).fetchone()
            return None if row is None else row[0]
        finally:
            conn.close()

    @staticmethod
    def _decode(raw: str | bytes) -> list[Task]:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError("stored payload is not an array")
        tasks = [task_from_record(rec) for rec in data]
        if len({t.id for t in tasks}) != len(tasks):
            raise ValueError("stored payload has duplicate task ids")
        return tasks

    # ---- public API ----

    def load_result(self) -> LoadResult:
        """Read the slot and report how it went (never raises)."""
        try:
            raw = self._read_raw()
        except Exception:
            logger.exception("TaskStore read failed db=%s", self._db_path)
            return LoadResult(status=LoadStatus.CORRUPT)

        if raw is None:
            return LoadResult(status=LoadStatus.MISSING)

        try:
            tasks = self._decode(raw)
        except Exception as e:
            logger.warning("Stored tasks are unreadable, starting empty (key=%s): %s", self._key, e)
            return LoadResult(status=LoadStatus.CORRUPT)

        logger.debug("Loaded %d tasks from key=%s", len(tasks), self._key)
        return LoadResult(tasks=tasks, status=LoadStatus.OK)

    def load(self) -> list[Task]:
        return self.load_result().tasks

    def save(self, tasks: Iterable[Task]) -> None:
        """
        Overwrite the whole collection in one upsert.

        Raises PersistenceWriteFailed; the write is not retried.
        """
        payload = json.dumps([task_to_record(t) for t in tasks], ensure_ascii=False)

        try:
            conn = self._get_conn()
            try:
                with conn:
                    conn.execute(
                        """
                        INSERT INTO kv(key, value, updated_at)
                        VALUES (?, ?, ?)
                        ON CONFLICT(key) DO UPDATE SET
                            value = excluded.value,
                            updated_at = excluded.updated_at
                        """,
                        (self._key, payload, time.time()),
                    )
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceWriteFailed(f"Failed to save tasks to {self._db_path}: {e}") from e

        logger.debug("Saved tasks key=%s bytes=%d", self._key, len(payload))

    def clear(self) -> None:
        """Drop the slot entirely (next load reports MISSING)."""
        conn = self._get_conn()
        try:
            with conn:
                conn.execute("DELETE FROM kv WHERE key = ?", (self._key,))
        finally:
            conn.close()

    def write_raw(self, raw: str) -> None:
        """Store an arbitrary payload in the slot (diagnostics / tests)."""
        conn = self._get_conn()
        try:
            with conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv(key, value, updated_at) VALUES (?, ?, ?)",
                    (self._key, raw, time.time()),
                )
        finally:
            conn.close()
