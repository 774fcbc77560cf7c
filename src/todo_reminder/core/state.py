# src/todo_reminder/core/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..notifications.gateway import NotificationGateway
from ..tasks.task_models import Snapshot, StatusFilter, Tab
from .ports import TaskRepo

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ViewState:
    """Transient UI selections (never persisted)."""

    tab: Tab = Tab.TODAY
    status_filter: StatusFilter = StatusFilter.PENDING
    query: str = ""


@dataclass(slots=True)
class AppState:
    """
    Owned application state.

    `tasks` is the single writable working copy. It is only ever replaced by a
    whole new snapshot (see commit), never patched in place. All access happens
    on the event loop thread, so no locking is needed.
    """

    settings: Any
    task_store: TaskRepo
    notifier: NotificationGateway

    tasks: Snapshot = ()
    view: ViewState = field(default_factory=ViewState)

    def commit(self, snapshot: Snapshot) -> bool:
        """
        Replace the working snapshot and write it through the store.

        Returns False (and writes nothing) when snapshot is the current one.
        PersistenceWriteFailed propagates after the in-memory copy is replaced.
        """
        if snapshot is self.tasks:
            return False
        self.tasks = tuple(snapshot)
        self.task_store.save(self.tasks)
        return True
