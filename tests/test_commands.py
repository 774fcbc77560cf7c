# tests/test_commands.py

from __future__ import annotations

from pathlib import Path

from todo_reminder.cli.commands import NOTIFY_FALLBACK_TEXT, CommandRegistry, registry
from todo_reminder.connectors.console_connector import handle_line
from todo_reminder.core.state import AppState
from todo_reminder.tasks.task_models import StatusFilter, Tab


def test_command_registry_routes_and_aliases(state: AppState) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def h(state, args, emit):
        called.append(args)
        if emit is not None:
            emit("note")
        return "ok"

    reg.register("a", h, "a", aliases=["alpha"])

    assert reg.handle(state, "/a x y") == "ok"
    assert reg.handle(state, "/ALPHA z", emit=lambda _: None) == "ok"
    assert called == [["x", "y"], ["z"]]


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_edit_done_rm_flow(state: AppState) -> None:
    reply = registry.handle(state, "/add Pay bill | 2026-03-14 17:30 | electricity, water")
    assert reply is not None and reply.startswith("Added:")
    [task] = state.tasks
    assert task.title == "Pay bill"
    assert task.notes == "electricity, water"
    assert task.due is not None

    short = task.id[:6]
    assert "Completed" in (registry.handle(state, f"/done {short}") or "")
    assert state.tasks[0].completed is True

    registry.handle(state, f"/edit {short} title Pay the bill")
    assert state.tasks[0].title == "Pay the bill"

    registry.handle(state, f"/edit {short} due -")
    assert state.tasks[0].due is None

    assert registry.handle(state, f"/rm {short}") == "Deleted."
    assert state.tasks == ()


def test_add_requires_title(state: AppState) -> None:
    assert "Title is required" in (registry.handle(state, "/add  | 2026-03-14") or "")
    assert state.tasks == ()


def test_bad_due_is_reported(state: AppState) -> None:
    reply = registry.handle(state, "/add Pay bill | whenever")
    assert reply is not None and "Cannot parse due time" in reply
    assert state.tasks == ()


def test_clear_needs_confirmation(state: AppState) -> None:
    registry.handle(state, "/add one")
    registry.handle(state, "/add two")

    assert "Confirm with /clear yes" in (registry.handle(state, "/clear") or "")
    assert len(state.tasks) == 2

    assert registry.handle(state, "/clear yes") == "Removed 2 tasks."
    assert state.task_store.load() == []


def test_view_commands_update_view_state(state: AppState) -> None:
    registry.handle(state, "/tab all")
    registry.handle(state, "/filter completed")
    registry.handle(state, "/search Bill")
    assert state.view.tab == Tab.ALL
    assert state.view.status_filter == StatusFilter.COMPLETED
    assert state.view.query == "Bill"

    assert "Usage" in (registry.handle(state, "/tab week") or "")
    registry.handle(state, "/search")
    assert state.view.query == ""


def test_list_shows_empty_hint_and_tasks(state: AppState) -> None:
    assert "Add your first task" in (registry.handle(state, "/list") or "")
    registry.handle(state, "/add Someday thing")
    registry.handle(state, "/tab all")
    listing = registry.handle(state, "/ls") or ""
    assert "[ ] Someday thing" in listing
    assert "No due date" in listing


def test_notify_reports_fallback_once_denied(state: AppState, surface) -> None:
    surface.perm = "default"
    surface.answer = "denied"
    assert registry.handle(state, "/notify") == NOTIFY_FALLBACK_TEXT

    surface.perm = "default"
    surface.answer = "granted"
    assert registry.handle(state, "/notify") == "Notifications enabled."


def test_export_command(state: AppState, tmp_path: Path) -> None:
    registry.handle(state, "/add Pay bill")
    reply = registry.handle(state, f"/export {tmp_path / 'dump'}") or ""
    assert reply.startswith("Exported 1 tasks to ")
    assert len(list((tmp_path / "dump").glob("tasks-*.json"))) == 1


def test_console_plain_text_adds_task(state: AppState) -> None:
    assert handle_line(state, "   ") is None
    reply = handle_line(state, "Buy milk")
    assert reply is not None and reply.startswith("Added:")
    assert state.tasks[0].title == "Buy milk"


def test_status_command(state: AppState) -> None:
    registry.handle(state, "/add Pay bill | 2000-01-01T00:00")
    reply = registry.handle(state, "/status") or ""
    assert "1 overdue" in reply
    assert "Notifications: granted" in reply


def test_add_and_edit_keep_inner_whitespace(state: AppState) -> None:
    registry.handle(state, "/add Pay  the   bill | | gas,  then  water")
    [task] = state.tasks
    assert task.title == "Pay  the   bill"
    assert task.notes == "gas,  then  water"

    registry.handle(state, f"/edit {task.id[:6]} notes line  one   two")
    assert state.tasks[0].notes == "line  one   two"

    registry.handle(state, "/search the   bill")
    assert state.view.query == "the   bill"


def test_raw_commands_get_unsplit_remainder(state: AppState) -> None:
    reg = CommandRegistry()
    seen: list[list[str]] = []
    reg.register("say", lambda state, args, emit: seen.append(args) or "ok", "say", aliases=["s"], raw=True)

    reg.handle(state, "/say  a   b ")
    reg.handle(state, "/S")
    assert seen == [["a   b "], []]
