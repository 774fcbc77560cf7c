# src/todo_reminder/errors.py

from __future__ import annotations


class TodoReminderError(Exception):
    """Base class for errors raised by this package."""


class PersistenceWriteFailed(TodoReminderError):
    """The task collection could not be written to the local store (not retried)."""


class InvalidDueError(TodoReminderError, ValueError):
    """A due date/time string could not be parsed."""
