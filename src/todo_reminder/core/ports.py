# src/todo_reminder/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the store and the notification surface swappable and makes testing easier.
"""

from collections.abc import Iterable
from typing import Literal, Protocol

from ..tasks.task_models import Task

# Raw platform permission, as reported by the notification surface.
PlatformPermission = Literal["default", "granted", "denied"]


class TaskRepo(Protocol):
    """Durable copy of the whole task collection."""

    def load(self) -> list[Task]: ...
    def save(self, tasks: Iterable[Task]) -> None: ...


class NotificationSurface(Protocol):
    """
    Platform side of notifications.

    permission() must not prompt. request_permission() may prompt the user once.
    show() raises a user-visible alert; a second alert with the same tag replaces
    the first one instead of stacking.
    """

    def permission(self) -> PlatformPermission: ...
    def request_permission(self) -> PlatformPermission: ...
    def show(self, title: str, body: str, tag: str) -> None: ...
