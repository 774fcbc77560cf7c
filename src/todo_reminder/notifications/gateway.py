# src/todo_reminder/notifications/gateway.py

from __future__ import annotations

"""
Notification gateway.

Negotiates permission with the platform surface and dispatches task reminders.
Every call returns an explicit result instead of raising, so the scheduler can
treat "no permission", "no surface" and "surface blew up" the same way: the task
stays eligible and is retried on the next tick.
"""

import logging
from enum import StrEnum

from ..core.ports import NotificationSurface
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_BODY = "Tap to open and mark complete"


class PermissionState(StrEnum):
    GRANTED = "granted"
    DENIED = "denied"
    UNSUPPORTED = "unsupported"


class DispatchResult(StrEnum):
    SUCCESS = "success"
    FAILURE = "failure"


def reminder_title(task: Task) -> str:
    return f"Reminder: {task.title}"


def reminder_body(task: Task) -> str:
    return task.notes or DEFAULT_BODY


class NotificationGateway:
    def __init__(self, surface: NotificationSurface | None) -> None:
        self._surface = surface

    @property
    def supported(self) -> bool:
        return self._surface is not None

    def current_permission(self) -> PermissionState:
        """Permission as it stands now, without prompting."""
        if self._surface is None:
            return PermissionState.UNSUPPORTED
        try:
            raw = self._surface.permission()
        except Exception:
            logger.exception("Notification permission query failed")
            return PermissionState.DENIED
        return PermissionState.GRANTED if raw == "granted" else PermissionState.DENIED

    def ensure_permission(self) -> PermissionState:
        """
        Make sure we may notify.

        Never re-prompts once the user has answered (granted or denied).
        """
        surface = self._surface
        if surface is None:
            return PermissionState.UNSUPPORTED

        try:
            raw = surface.permission()
            if raw == "default":
                logger.info("Requesting notification permission")
                raw = surface.request_permission()
        except Exception:
            logger.exception("Notification permission request failed")
            return PermissionState.DENIED

        state = PermissionState.GRANTED if raw == "granted" else PermissionState.DENIED
        logger.debug("Notification permission: %s", state.value)
        return state

    def dispatch(self, task: Task) -> DispatchResult:
        surface = self._surface
        if surface is None:
            return DispatchResult.FAILURE

        if self.current_permission() != PermissionState.GRANTED:
            logger.debug("Reminder for task %s not sent: permission not granted", task.id)
            return DispatchResult.FAILURE

        try:
            surface.show(reminder_title(task), reminder_body(task), task.id)
        except Exception:
            logger.exception("Notification raise failed task_id=%s", task.id)
            return DispatchResult.FAILURE

        logger.info("Reminder sent task_id=%s", task.id)
        return DispatchResult.SUCCESS
