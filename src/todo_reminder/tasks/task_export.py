# src/todo_reminder/tasks/task_export.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from .task_models import Task, task_to_record, utc_now

logger = logging.getLogger(__name__)


def export_filename(now: datetime | None = None) -> str:
    # ISO timestamp with ':' swapped out so the name is valid everywhere.
    ts = (now or utc_now()).astimezone(UTC).strftime("%Y-%m-%dT%H-%M-%S.%f")[:-3] + "Z"
    return f"tasks-{ts}.json"


def export_tasks(tasks: Iterable[Task], export_dir: str | Path, *, now: datetime | None = None) -> Path:
    """Write a pretty-printed JSON copy of the collection and return its path."""
    out_dir = Path(export_dir).expanduser()
    out_dir.mkdir(parents=True, exist_ok=True)

    records = [task_to_record(t) for t in tasks]
    path = out_dir / export_filename(now)
    path.write_text(json.dumps(records, ensure_ascii=False, indent=2) + "\n", "utf-8")

    logger.info("Exported %d tasks to %s", len(records), path)
    return path
