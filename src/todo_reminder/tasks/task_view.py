# src/todo_reminder/tasks/task_view.py

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from .task_models import StatusFilter, Tab, Task, utc_now


def _local(dt: datetime) -> datetime:
    return dt.astimezone()


def is_today(dt: datetime | None, now: datetime | None = None) -> bool:
    """True if dt falls on the current local calendar date."""
    if dt is None:
        return False
    return _local(dt).date() == _local(now or utc_now()).date()


def is_overdue(task: Task, now: datetime | None = None) -> bool:
    if task.due is None or task.completed:
        return False
    return task.due < (now or utc_now())


def _sort_key(task: Task) -> tuple[bool, float]:
    # Tasks without a due time go last; sorted() keeps equal keys in input order.
    if task.due is None:
        return (True, 0.0)
    return (False, task.due.timestamp())


def project(
    tasks: Iterable[Task],
    tab: Tab | str = Tab.TODAY,
    status_filter: StatusFilter | str = StatusFilter.PENDING,
    query: str = "",
    *,
    now: datetime | None = None,
) -> list[Task]:
    """
    Derive the visible list from the raw collection and the UI selections.

    Pure: the same inputs (including now) always produce the same list.
    """
    tab = Tab(tab)
    status_filter = StatusFilter(status_filter)
    now = now or utc_now()

    out = list(tasks)

    if tab == Tab.TODAY:
        out = [t for t in out if is_today(t.due, now)]

    if status_filter == StatusFilter.PENDING:
        out = [t for t in out if not t.completed]
    elif status_filter == StatusFilter.COMPLETED:
        out = [t for t in out if t.completed]

    if query and query.strip():
        needle = query.lower()
        out = [t for t in out if needle in t.title.lower()]

    return sorted(out, key=_sort_key)
