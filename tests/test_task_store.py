# tests/test_task_store.py

from __future__ import annotations

import json
import sqlite3
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from todo_reminder.errors import PersistenceWriteFailed
from todo_reminder.tasks.task_models import Task
from todo_reminder.tasks.task_store import LoadStatus, TaskStore


def _tasks(t0: datetime) -> list[Task]:
    return [
        Task(id="a", title="Pay bill", created_at=t0, due=t0 + timedelta(hours=1), notes="electricity"),
        Task(id="b", title="Call mom", created_at=t0, completed=True, notified=True, due=t0),
        Task(id="c", title="Read", created_at=t0 + timedelta(microseconds=123)),
    ]


def test_save_then_load_round_trips(store: TaskStore, t0: datetime) -> None:
    tasks = _tasks(t0)
    store.save(tasks)
    assert store.load() == tasks
    assert store.load_result().status == LoadStatus.OK


def test_save_overwrites_whole_collection(store: TaskStore, t0: datetime) -> None:
    store.save(_tasks(t0))
    store.save([])
    assert store.load() == []
    assert store.load_result().status == LoadStatus.OK


def test_missing_slot_loads_empty(store: TaskStore) -> None:
    result = store.load_result()
    assert result.tasks == []
    assert result.status == LoadStatus.MISSING


def test_cleared_store_loads_empty(store: TaskStore, t0: datetime) -> None:
    store.save(_tasks(t0))
    store.clear()
    assert store.load() == []


@pytest.mark.parametrize(
    "raw",
    [
        "not json at all",
        '{"id": "a"}',
        '[{"id": "a", "title": "x"}]',  # no createdAt
        '[{"id": "a", "title": "", "createdAt": "2026-01-01T00:00:00+00:00"}]',
        '[{"id": "a", "title": "x", "completed": "no", "createdAt": "2026-01-01T00:00:00+00:00"}]',
        '[{"id": "a", "title": "x", "due": "tomorrow", "createdAt": "2026-01-01T00:00:00+00:00"}]',
    ],
)
def test_corrupt_payload_loads_empty(store: TaskStore, raw: str) -> None:
    store.write_raw(raw)
    result = store.load_result()
    assert result.tasks == []
    assert result.status == LoadStatus.CORRUPT
    assert store.load() == []


def test_one_bad_record_discards_whole_payload(store: TaskStore, t0: datetime) -> None:
    store.save(_tasks(t0))
    with sqlite3.connect(store._db_path) as conn:  # noqa: SLF001
        raw = conn.execute("SELECT value FROM kv").fetchone()[0]
    data = json.loads(raw)
    data.append({"title": "no id"})
    store.write_raw(json.dumps(data))

    assert store.load() == []


def test_duplicate_ids_are_corrupt(store: TaskStore, t0: datetime) -> None:
    store.save([Task(id="a", title="one", created_at=t0), Task(id="a", title="two", created_at=t0)])

    result = store.load_result()
    assert result.status == LoadStatus.CORRUPT
    assert result.tasks == []


def test_empty_notes_round_trip(store: TaskStore, t0: datetime) -> None:
    tasks = [Task(id="a", title="Pay bill", created_at=t0, notes="")]
    store.save(tasks)
    assert store.load() == tasks


def test_loads_records_without_notified_flag(store: TaskStore) -> None:
    store.write_raw(
        json.dumps(
            [
                {
                    "id": "1700000000000_abc123",
                    "title": "Legacy",
                    "due": "2026-03-14T09:00:00.000Z",
                    "completed": False,
                    "createdAt": "2026-03-13T09:00:00.000Z",
                }
            ]
        )
    )
    [task] = store.load()
    assert task.notified is False
    assert task.due == datetime(2026, 3, 14, 9, 0, tzinfo=UTC)


def test_payload_shape_matches_record_format(store: TaskStore, t0: datetime) -> None:
    store.save([Task(id="a", title="Pay bill", created_at=t0)])
    with sqlite3.connect(store._db_path) as conn:  # noqa: SLF001
        raw = conn.execute("SELECT value FROM kv WHERE key = ?", (store.key,)).fetchone()[0]

    [rec] = json.loads(raw)
    assert rec == {
        "id": "a",
        "title": "Pay bill",
        "completed": False,
        "notified": False,
        "createdAt": "2026-03-14T09:00:00+00:00",
    }


def test_save_failure_raises_persistence_write_failed(tmp_path: Path, t0: datetime) -> None:
    db = tmp_path / "tasks.sqlite3"
    store = TaskStore(db)
    with sqlite3.connect(db) as conn:
        conn.execute("DROP TABLE kv")

    with pytest.raises(PersistenceWriteFailed):
        store.save(_tasks(t0))


def test_slots_are_independent(tmp_path: Path, t0: datetime) -> None:
    db = tmp_path / "tasks.sqlite3"
    a = TaskStore(db, key="one")
    b = TaskStore(db, key="two")
    a.save(_tasks(t0))
    assert b.load() == []
    assert len(a.load()) == 3
