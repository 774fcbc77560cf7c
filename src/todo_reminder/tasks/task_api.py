# src/todo_reminder/tasks/task_api.py

"""
High-level task operations on AppState.

Each helper runs a pure mutator against the current snapshot and commits the
result (replace + write-through). They are what the console commands call.
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..core.state import AppState
from . import task_mutators
from .task_models import Task, TaskDraft, TaskUpdate
from .task_view import project

logger = logging.getLogger(__name__)


def add_task(
    state: AppState,
    title: str,
    *,
    notes: str | None = None,
    due: datetime | str | None = None,
    now: datetime | None = None,
) -> Task | None:
    """Create a task. Returns it, or None when the title was blank."""
    snapshot = task_mutators.add(state.tasks, TaskDraft(title=title, notes=notes, due=due), now=now)
    if not state.commit(snapshot):
        return None
    task = snapshot[0]
    logger.info("Task created id=%s", task.id)
    return task


def toggle_task(state: AppState, task_id: str) -> Task | None:
    state.commit(task_mutators.toggle_complete(state.tasks, task_id))
    return task_mutators.find(state.tasks, task_id)


def edit_task(state: AppState, task_id: str, updates: TaskUpdate) -> Task | None:
    state.commit(task_mutators.edit(state.tasks, task_id, updates))
    return task_mutators.find(state.tasks, task_id)


def delete_task(state: AppState, task_id: str) -> bool:
    changed = state.commit(task_mutators.remove(state.tasks, task_id))
    if changed:
        logger.info("Task deleted id=%s", task_id)
    return changed


def clear_tasks(state: AppState) -> int:
    """Remove every task (caller has already confirmed). Returns how many were dropped."""
    n = len(state.tasks)
    state.commit(task_mutators.clear_all(state.tasks))
    logger.info("All tasks cleared (%d)", n)
    return n


def visible_tasks(state: AppState, *, now: datetime | None = None) -> list[Task]:
    v = state.view
    return project(state.tasks, v.tab, v.status_filter, v.query, now=now)
