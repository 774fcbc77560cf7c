# src/todo_reminder/notifications/console_notifier.py

"""Terminal notification surface: timestamped lines on a stream + optional bell."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from datetime import datetime
from typing import TextIO

from ..core.ports import PlatformPermission

logger = logging.getLogger(__name__)

ConsentPrompt = Callable[[], bool]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleNotificationSurface:
    """
    Notification surface for local terminal usage.

    The consent prompt is asked at most once; afterwards the answer sticks for the
    lifetime of the surface, like a browser's one-shot permission dialog.
    """

    __slots__ = ("_permission", "_consent", "_stream", "_enable_bell", "active")

    def __init__(
        self,
        *,
        permission: PlatformPermission = "default",
        consent: ConsentPrompt | None = None,
        stream: TextIO | None = None,
        enable_bell: bool = False,
    ) -> None:
        if permission not in ("default", "granted", "denied"):
            permission = "default"
        self._permission: PlatformPermission = permission
        # Without a prompt, running /notify is itself the user's consent.
        self._consent = consent or (lambda: True)
        self._stream = stream
        self._enable_bell = enable_bell
        # tag -> last text shown; a new alert with the same tag replaces the entry
        self.active: dict[str, str] = {}

    def permission(self) -> PlatformPermission:
        return self._permission

    def request_permission(self) -> PlatformPermission:
        if self._permission != "default":
            return self._permission
        self._permission = "granted" if self._consent() else "denied"
        logger.info("Console notifications %s", self._permission)
        return self._permission

    def show(self, title: str, body: str, tag: str) -> None:
        if self._permission != "granted":
            raise PermissionError("console notifications are not permitted")

        if tag in self.active:
            logger.debug("Replacing notification tag=%s", tag)

        text = f"{title} - {body}" if body else title
        self.active[tag] = text

        out = self._stream or sys.stdout
        out.write(f"\n[{_ts_local()}] [REMINDER] {text}\n")
        if self._enable_bell:
            out.write("\a")
        out.flush()
