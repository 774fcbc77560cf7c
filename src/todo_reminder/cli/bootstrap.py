# src/todo_reminder/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the task store and notification gateway into AppState,
- loads the persisted task collection.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import NotificationSurface
from ..core.state import AppState
from ..notifications.console_notifier import ConsentPrompt, ConsoleNotificationSurface
from ..notifications.gateway import NotificationGateway
from ..tasks.task_store import LoadStatus, TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def build_notification_surface(settings, *, consent: ConsentPrompt | None = None) -> NotificationSurface | None:
    backend = str(getattr(settings, "notify_backend", "console"))
    if backend == "none":
        return None
    return ConsoleNotificationSurface(
        permission=getattr(settings, "notify_permission", "default"),
        consent=consent,
        enable_bell=bool(getattr(settings, "notify_bell", False)),
    )


def create_initial_state(*, settings=None, consent: ConsentPrompt | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(settings.store_path, key=getattr(settings, "storage_key", "todo_mvp_tasks_v1"))
    notifier = NotificationGateway(build_notification_surface(settings, consent=consent))

    loaded = store.load_result()
    if loaded.status == LoadStatus.CORRUPT:
        logger.warning("Starting with an empty task list (stored data was unreadable).")
    logger.info("Loaded %d tasks (%s)", len(loaded.tasks), loaded.status.value)

    return AppState(
        settings=settings,
        task_store=store,
        notifier=notifier,
        tasks=tuple(loaded.tasks),
    )
