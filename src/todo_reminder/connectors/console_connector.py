# src/todo_reminder/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_list
from ..core.state import AppState

logger = logging.getLogger(__name__)

_EOF = None  # queue marker: stdin closed


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def start_stdin_reader(loop: asyncio.AbstractEventLoop, lines: asyncio.Queue[str | None]) -> threading.Thread:
    """
    Read stdin on a daemon thread and hand raw lines to the event loop.

    The thread never touches AppState; it only feeds the queue, so every command
    is still executed on the loop thread, in order, between scheduler ticks.
    """

    def _reader() -> None:
        while True:
            try:
                line = input()
            except (EOFError, KeyboardInterrupt):
                loop.call_soon_threadsafe(lines.put_nowait, _EOF)
                return
            except Exception:
                logger.exception("stdin reader crashed")
                loop.call_soon_threadsafe(lines.put_nowait, _EOF)
                return
            loop.call_soon_threadsafe(lines.put_nowait, line)

    t = threading.Thread(target=_reader, name="stdin-reader", daemon=True)
    t.start()
    return t


def handle_line(state: AppState, line: str) -> str | None:
    """Turn one console line into a reply (None means: nothing to print)."""
    text = line.strip()
    if not text:
        return None

    if not text.startswith("/"):
        # Bare text is shorthand for /add.
        text = "/add " + text

    try:
        return command_registry.handle(state, text, emit=_print_ts)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."


async def run_console_loop(state: AppState, lines: asyncio.Queue[str | None] | None = None) -> None:
    """
    Consume console lines until /exit or EOF.

    When no queue is given, a stdin reader thread is started for it.
    """
    if lines is None:
        lines = asyncio.Queue()
        start_stdin_reader(asyncio.get_running_loop(), lines)

    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type /help for commands, /exit to quit. Plain text adds a task.")
    print(render_list(state), flush=True)

    while True:
        line = await lines.get()
        if line is _EOF:
            logger.info("Console EOF received, exiting.")
            break

        if line.strip().lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, line)
        if reply is not None:
            _print_ts(reply)

    logger.info("Console connector finished.")
