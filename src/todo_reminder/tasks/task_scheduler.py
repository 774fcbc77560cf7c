# src/todo_reminder/tasks/task_scheduler.py

from __future__ import annotations

"""
Reminder scheduler.

A small polling loop that, every interval:
- picks tasks that are due, incomplete and not yet notified,
- dispatches one reminder per task through the notification gateway,
- marks successfully reminded tasks as notified and persists the new snapshot.

A failed dispatch leaves the task eligible, so it is retried on the next tick
for as long as the failure lasts. Idle ticks never touch the store.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime

from ..core.state import AppState
from ..errors import PersistenceWriteFailed
from ..notifications.gateway import DispatchResult, NotificationGateway
from .task_models import Snapshot, Task, utc_now

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class TickResult:
    snapshot: Snapshot
    dispatched: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.dispatched)


def is_eligible(task: Task, now: datetime) -> bool:
    return task.due is not None and not task.completed and not task.notified and task.due <= now


def run_reminder_tick(snapshot: Snapshot, gateway: NotificationGateway, now: datetime) -> TickResult:
    """
    One scheduler pass over snapshot.

    Returns the same snapshot object when nothing was marked notified.
    """
    dispatched: list[str] = []
    failed: list[str] = []
    out: list[Task] = []

    for task in snapshot:
        if not is_eligible(task, now):
            out.append(task)
            continue

        if gateway.dispatch(task) == DispatchResult.SUCCESS:
            dispatched.append(task.id)
            out.append(replace(task, notified=True))
        else:
            failed.append(task.id)
            out.append(task)

    if failed:
        logger.debug("Reminder dispatch failed for %d task(s); will retry next tick", len(failed))

    if not dispatched:
        return TickResult(snapshot=snapshot, failed=failed)
    return TickResult(snapshot=tuple(out), dispatched=dispatched, failed=failed)


def check_due_tasks(
    state: AppState,
    gateway: NotificationGateway | None = None,
    *,
    now: datetime | None = None,
) -> TickResult:
    """Run one tick against the app state and commit only if something changed."""
    result = run_reminder_tick(state.tasks, gateway or state.notifier, now or utc_now())
    if result.changed:
        state.commit(result.snapshot)
        logger.info("Marked %d task(s) notified", len(result.dispatched))
    return result


async def run_reminder_scheduler(
        state: AppState,
        gateway: NotificationGateway | None = None,
        *,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
) -> None:
    """
    Simple polling scheduler.

    Every interval_seconds run check_due_tasks(). To stop the scheduler, cancel
    the coroutine/task; no tick runs after cancellation.
    """
    sleep_s = max(0.5, float(interval_seconds))
    logger.info("Reminder scheduler started (interval=%.1fs)", sleep_s)

    try:
        while True:
            try:
                check_due_tasks(state, gateway)
            except PersistenceWriteFailed:
                logger.exception("Could not persist reminder state")
            except Exception:
                logger.exception("Reminder tick failed")

            await asyncio.sleep(sleep_s)
    finally:
        logger.info("Reminder scheduler stopped")
