# src/todo_reminder/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from ..errors import InvalidDueError

# Sentinel for "field not present in the update".
UNSET: Any = object()

Snapshot = tuple["Task", ...]


class Tab(StrEnum):
    TODAY = "today"
    ALL = "all"


class StatusFilter(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    ALL = "all"


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    created_at: datetime

    notes: str | None = None
    due: datetime | None = None
    completed: bool = False
    notified: bool = False  # a reminder was dispatched for the current `due`


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """Raw add-request as typed by the user (due may still be a string)."""

    title: str
    notes: str | None = None
    due: datetime | str | None = None


@dataclass(frozen=True, slots=True)
class TaskUpdate:
    """
    Partial update for edit().

    Fields left as UNSET are not touched. due=None clears the due time.
    """

    title: Any = UNSET
    notes: Any = UNSET
    due: Any = UNSET
    completed: Any = UNSET
    notified: Any = UNSET


def _to_utc(dt: datetime) -> datetime:
    # Naive values are local wall-clock time, like an HTML datetime-local input.
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone(UTC)


def parse_due(raw: datetime | str | None) -> datetime | None:
    """
    Parse a due value into an aware UTC datetime.

    Accepts datetimes, ISO-8601 strings ("2026-10-18T17:30", "2026-10-18 17:30",
    "...Z", with offsets) and empty input (-> None).
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return _to_utc(raw)

    text = str(raw).strip()
    if not text:
        return None
    try:
        return _to_utc(datetime.fromisoformat(text))
    except ValueError as e:
        raise InvalidDueError(f"Cannot parse due time: {text!r}") from e


def utc_now() -> datetime:
    return datetime.now(UTC)


# ---- JSON record shape (shared by the store and the exporter) ----


def _fmt_ts(dt: datetime) -> str:
    return _to_utc(dt).isoformat()


def _parse_ts(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw:
        raise ValueError(f"timestamp must be a non-empty string, got {raw!r}")
    return _to_utc(datetime.fromisoformat(raw))


def task_to_record(task: Task) -> dict[str, Any]:
    rec: dict[str, Any] = {"id": task.id, "title": task.title}
    if task.notes is not None:
        rec["notes"] = task.notes
    if task.due is not None:
        rec["due"] = _fmt_ts(task.due)
    rec["completed"] = task.completed
    rec["notified"] = task.notified
    rec["createdAt"] = _fmt_ts(task.created_at)
    return rec


def task_from_record(rec: Any) -> Task:
    """
    Build a Task from a stored record.

    Raises ValueError on any structural problem; callers decide how to degrade.
    """
    if not isinstance(rec, dict):
        raise ValueError("task record must be an object")

    task_id = rec.get("id")
    title = rec.get("title")
    if not isinstance(task_id, str) or not task_id:
        raise ValueError("task record has no id")
    if not isinstance(title, str) or not title.strip():
        raise ValueError(f"task {task_id} has an empty title")

    notes = rec.get("notes")
    if notes is not None and not isinstance(notes, str):
        raise ValueError(f"task {task_id} has non-text notes")

    completed = rec.get("completed", False)
    notified = rec.get("notified", False)  # absent in records written before reminders existed
    if not isinstance(completed, bool) or not isinstance(notified, bool):
        raise ValueError(f"task {task_id} has non-boolean flags")

    due_raw = rec.get("due")
    due = _parse_ts(due_raw) if due_raw is not None else None

    return Task(
        id=task_id,
        title=title,
        notes=notes,
        due=due,
        completed=completed,
        notified=notified,
        created_at=_parse_ts(rec.get("createdAt")),
    )
