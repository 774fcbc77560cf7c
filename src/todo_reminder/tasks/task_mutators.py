# src/todo_reminder/tasks/task_mutators.py

"""
Pure state transitions over a task snapshot.

Every function takes a snapshot (tuple of Task) and returns a new one; inputs are
never modified. When an operation does nothing the very same snapshot object is
returned, so callers can skip the store write with an identity check.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from .task_models import UNSET, Snapshot, Task, TaskDraft, TaskUpdate, parse_due, utc_now

logger = logging.getLogger(__name__)


def new_task_id(existing: Iterable[str] = ()) -> str:
    taken = set(existing)
    while True:
        task_id = uuid.uuid4().hex
        if task_id not in taken:
            return task_id


def _clean_notes(notes: str | None) -> str | None:
    return (notes or "").strip() or None


def find(snapshot: Snapshot, task_id: str) -> Task | None:
    for t in snapshot:
        if t.id == task_id:
            return t
    return None


def resolve_id(snapshot: Snapshot, prefix: str) -> str | None:
    """Return the id that equals or uniquely starts with prefix."""
    prefix = (prefix or "").strip()
    if not prefix:
        return None
    if find(snapshot, prefix) is not None:
        return prefix
    matches = [t.id for t in snapshot if t.id.startswith(prefix)]
    return matches[0] if len(matches) == 1 else None


def add(snapshot: Snapshot, draft: TaskDraft, *, now: datetime | None = None) -> Snapshot:
    """
    Prepend a new task built from draft.

    Blank titles are rejected (snapshot returned unchanged). An unparseable due
    string raises InvalidDueError.
    """
    title = (draft.title or "").strip()
    if not title:
        logger.debug("add rejected: empty title")
        return snapshot

    task = Task(
        id=new_task_id(t.id for t in snapshot),
        title=title,
        notes=_clean_notes(draft.notes),
        due=parse_due(draft.due),
        completed=False,
        notified=False,
        created_at=now or utc_now(),
    )
    logger.debug("Task added id=%s due=%s", task.id, task.due)
    return (task, *snapshot)


def _reopened(task: Task) -> Task:
    # Back to open without a due edit: the current deadline stays silenced.
    return replace(task, completed=False, notified=task.notified or task.due is not None)


def toggle_complete(snapshot: Snapshot, task_id: str) -> Snapshot:
    """
    Flip completed on the matching task.

    Reopening a task that has a due time marks it notified, so only an edit of
    due makes it eligible for a reminder again.
    """
    if find(snapshot, task_id) is None:
        return snapshot
    return tuple(
        (_reopened(t) if t.completed else replace(t, completed=True)) if t.id == task_id else t for t in snapshot
    )


def _apply_update(task: Task, updates: TaskUpdate) -> Task:
    changes: dict[str, object] = {}

    if updates.title is not UNSET:
        title = (updates.title or "").strip()
        if title:
            changes["title"] = title

    if updates.notes is not UNSET:
        changes["notes"] = _clean_notes(updates.notes)

    if updates.completed is not UNSET:
        changes["completed"] = bool(updates.completed)

    if updates.notified is not UNSET:
        changes["notified"] = bool(updates.notified)

    if task.completed and changes.get("completed") is False and task.due is not None:
        changes["notified"] = True

    if updates.due is not UNSET:
        due = parse_due(updates.due)
        if due != task.due:
            # A new deadline needs a fresh reminder, whatever the caller asked for.
            changes["due"] = due
            changes["notified"] = False

    return replace(task, **changes) if changes else task


def edit(snapshot: Snapshot, task_id: str, updates: TaskUpdate) -> Snapshot:
    """
    Merge updates into the matching task.

    notified is reset only when due actually changes value (including clearing).
    """
    current = find(snapshot, task_id)
    if current is None:
        return snapshot

    updated = _apply_update(current, updates)
    if updated == current:
        return snapshot
    return tuple(updated if t.id == task_id else t for t in snapshot)


def remove(snapshot: Snapshot, task_id: str) -> Snapshot:
    if find(snapshot, task_id) is None:
        return snapshot
    return tuple(t for t in snapshot if t.id != task_id)


def clear_all(snapshot: Snapshot) -> Snapshot:
    """Drop every task. The caller confirms the destructive action first."""
    return ()
