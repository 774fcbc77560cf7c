# src/todo_reminder/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every key has a default.
- Invalid values fall back to defaults instead of failing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

NOTIFY_BACKENDS = ("console", "none")
NOTIFY_PERMISSIONS = ("default", "granted", "denied")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = _env(name, default).strip().lower()
    return raw if raw in choices else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Local data ----
    data_dir: Path
    store_path: Path
    storage_key: str
    export_dir: Path

    # ---- Reminders ----
    check_interval_seconds: float
    notify_backend: str
    notify_permission: str
    notify_bell: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-reminder").strip() or "todo-reminder"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo"))
        store_path = _env_path(_k("STORE_PATH"), data_dir / "tasks.sqlite3")
        storage_key = _env(_k("STORAGE_KEY"), "todo_mvp_tasks_v1").strip() or "todo_mvp_tasks_v1"
        export_dir = _env_path(_k("EXPORT_DIR"), data_dir / "exports")

        check_interval_seconds = _env_float(_k("CHECK_INTERVAL_SECONDS"), 30.0)
        if check_interval_seconds <= 0:
            check_interval_seconds = 30.0

        notify_backend = _env_choice(_k("NOTIFY_BACKEND"), NOTIFY_BACKENDS, "console")
        notify_permission = _env_choice(_k("NOTIFY_PERMISSION"), NOTIFY_PERMISSIONS, "default")
        notify_bell = _env_bool(_k("NOTIFY_BELL"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            store_path=store_path,
            storage_key=storage_key,
            export_dir=export_dir,
            check_interval_seconds=check_interval_seconds,
            notify_backend=notify_backend,
            notify_permission=notify_permission,
            notify_bell=notify_bell,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings; .env is read once on first access."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
