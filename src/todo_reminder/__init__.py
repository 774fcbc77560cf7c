"""Local task tracker with due-time reminders."""

__version__ = "0.1.0"
