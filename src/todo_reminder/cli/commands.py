# src/todo_reminder/cli/commands.py

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from ..core.state import AppState
from ..errors import InvalidDueError, PersistenceWriteFailed
from ..notifications.gateway import PermissionState
from ..tasks import task_api
from ..tasks.task_export import export_tasks
from ..tasks.task_models import StatusFilter, Tab, Task, TaskUpdate, utc_now
from ..tasks.task_mutators import resolve_id
from ..tasks.task_view import is_overdue

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], str]

logger = logging.getLogger(__name__)

NOTIFY_FALLBACK_TEXT = "Notifications not enabled. We'll still keep reminders in-app."


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        # commands that get the unsplit remainder of the line as their single arg
        self._raw: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        raw: bool = False,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler
        if raw:
            self._raw.update(n.lower() for n in (name, *aliases))

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""
        if name in self._raw:
            args = [rest] if rest.strip() else []
        else:
            args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args, emit)
        except InvalidDueError as e:
            return f"{e}. Use e.g. 2026-10-18T17:30."
        except PersistenceWriteFailed:
            logger.exception("Saving tasks failed after /%s", name)
            return "Change applied, but saving to disk failed (see log)."

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def fmt_due(dt: datetime | None) -> str:
    if dt is None:
        return "No due date"
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")


def render_task(task: Task, now: datetime | None = None) -> str:
    box = "[x]" if task.completed else "[ ]"
    line = f"{box} {task.title}  ({task.id[:8]})  Due: {fmt_due(task.due)}"
    if is_overdue(task, now):
        line += "  OVERDUE"
    if task.notes:
        line += "\n      " + task.notes.replace("\n", "\n      ")
    return line


def render_list(state: AppState, now: datetime | None = None) -> str:
    now = now or utc_now()
    v = state.view
    header = f"{v.tab.value.capitalize()} / {v.status_filter.value}"
    if v.query.strip():
        header += f" / search: {v.query!r}"

    visible = task_api.visible_tasks(state, now=now)
    if not visible:
        if not state.tasks:
            return f"{header}\nAdd your first task with /add <title> | <due>. Title and due time are enough."
        return f"{header}\nNo tasks match the current view."

    return "\n".join([header, *(render_task(t, now) for t in visible)])


def _lookup(state: AppState, raw: str | None) -> str | None:
    return resolve_id(state.tasks, raw or "")


# ---- handlers ----


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    now = utc_now()
    total = len(state.tasks)
    pending = sum(1 for t in state.tasks if not t.completed)
    overdue = sum(1 for t in state.tasks if is_overdue(t, now))
    interval = getattr(state.settings, "check_interval_seconds", 30.0)
    return (
        "Status:\n"
        f"  Tasks: {total} ({pending} pending, {overdue} overdue)\n"
        f"  Notifications: {state.notifier.current_permission().value}\n"
        f"  Reminder check every {interval:g}s"
    )


def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return render_list(state)


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add <title> [| <due>] [| <notes>]
    """
    fields = [p.strip() for p in " ".join(args).split("|")]
    title = fields[0] if fields else ""
    due = fields[1] if len(fields) > 1 else None
    notes = " | ".join(fields[2:]) if len(fields) > 2 else None

    task = task_api.add_task(state, title, notes=notes, due=due)
    if task is None:
        return "Title is required. Usage: /add <title> | <due> | <notes>"
    return f"Added: {render_task(task)}"


def cmd_done(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task_id = _lookup(state, args[0] if args else None)
    if task_id is None:
        return "Usage: /done <id>  (unknown or ambiguous id)"
    task = task_api.toggle_task(state, task_id)
    if task is None:
        return "Task not found."
    return f"{'Completed' if task.completed else 'Reopened'}: {task.title}"


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /edit <id> title <text>
    /edit <id> notes <text>     (no text clears notes)
    /edit <id> due <when>       ("-" clears the due time)
    """
    usage = "Usage: /edit <id> title|notes|due <value>"
    parts = " ".join(args).split(maxsplit=2)
    if len(parts) < 2:
        return usage

    task_id = _lookup(state, parts[0])
    if task_id is None:
        return "Unknown or ambiguous id."

    field = parts[1].lower()
    value = parts[2].strip() if len(parts) > 2 else ""

    if field == "title":
        if not value:
            return "Title cannot be empty."
        updates = TaskUpdate(title=value)
    elif field == "notes":
        updates = TaskUpdate(notes=value)
    elif field == "due":
        updates = TaskUpdate(due=None if value in ("", "-") else value)
    else:
        return usage

    task = task_api.edit_task(state, task_id, updates)
    if task is None:
        return "Task not found."
    return f"Updated: {render_task(task)}"


def cmd_rm(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task_id = _lookup(state, args[0] if args else None)
    if task_id is None:
        return "Usage: /rm <id>  (unknown or ambiguous id)"
    task_api.delete_task(state, task_id)
    return "Deleted."


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args or args[0].lower() != "yes":
        return f"This will remove ALL {len(state.tasks)} tasks. Confirm with /clear yes."
    n = task_api.clear_tasks(state)
    return f"Removed {n} tasks."


def cmd_tab(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    try:
        state.view.tab = Tab(args[0].lower()) if args else Tab.TODAY
    except ValueError:
        return "Usage: /tab today|all"
    return render_list(state)


def cmd_filter(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    try:
        state.view.status_filter = StatusFilter(args[0].lower()) if args else StatusFilter.PENDING
    except ValueError:
        return "Usage: /filter pending|completed|all"
    return render_list(state)


def cmd_search(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    state.view.query = " ".join(args).strip()
    return render_list(state)


def cmd_notify(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        with contextlib.suppress(Exception):
            emit("[NOTIFY] Checking notification permission...")

    result = state.notifier.ensure_permission()
    if result != PermissionState.GRANTED:
        return NOTIFY_FALLBACK_TEXT
    return "Notifications enabled."


def cmd_export(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    target = Path(" ".join(args).strip()) if args else Path(getattr(state.settings, "export_dir", "."))
    try:
        path = export_tasks(state.tasks, target)
    except OSError as e:
        logger.exception("Export failed dir=%s", target)
        return f"Export failed: {e}"
    return f"Exported {len(state.tasks)} tasks to {path}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task counts and notification state.")
registry.register("list", cmd_list, help_text="Show tasks for the current tab/filter/search.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> | <due> | <notes>.", raw=True)
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> title|notes|due <value>.", raw=True)
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["delete", "del"])
registry.register("clear", cmd_clear, help_text="Remove all tasks: /clear yes.")
registry.register("tab", cmd_tab, help_text="Switch tab: /tab today | /tab all.")
registry.register("filter", cmd_filter, help_text="Filter: /filter pending | completed | all.")
registry.register("search", cmd_search, help_text="Search titles: /search <text> (empty clears).", raw=True)
registry.register("notify", cmd_notify, help_text="Enable desktop-style reminders.")
registry.register("export", cmd_export, help_text="Export tasks as JSON: /export [dir].", raw=True)
