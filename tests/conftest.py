# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_reminder.core.state import AppState
from todo_reminder.notifications.gateway import NotificationGateway
from todo_reminder.tasks.task_store import TaskStore

from .fakes import FakeNotificationSurface


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path,
        store_path=tmp_path / "tasks.sqlite3",
        storage_key="todo_mvp_tasks_v1",
        export_dir=tmp_path / "exports",
        check_interval_seconds=30.0,
        notify_backend="console",
        notify_permission="default",
        notify_bell=False,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.store_path, key=settings.storage_key)


@pytest.fixture()
def surface() -> FakeNotificationSurface:
    return FakeNotificationSurface()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, surface: FakeNotificationSurface) -> AppState:
    """
    AppState wired with a fake notification surface.

    NOTE: We keep the real SQLite store here because write-through is part of
    what we want to test.
    """
    return AppState(settings=settings, task_store=store, notifier=NotificationGateway(surface))


@pytest.fixture()
def t0() -> datetime:
    return datetime(2026, 3, 14, 9, 0, tzinfo=UTC)
