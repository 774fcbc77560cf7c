# src/todo_reminder/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs everything on one event loop:
- the reminder scheduler as a background asyncio task,
- the console REPL (optional) consuming stdin lines from a queue.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..tasks.task_scheduler import run_reminder_scheduler

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # Every mutation was already written through; only release resources here.
    with contextlib.suppress(Exception):
        close = getattr(state.task_store, "close", None)
        if close is not None:
            close()


async def run_app(state: AppState) -> None:
    settings = state.settings
    stop_main = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on every platform (e.g. Windows event loops).
        with contextlib.suppress(NotImplementedError, RuntimeError, ValueError):
            loop.add_signal_handler(sig, stop_main.set)

    scheduler = asyncio.create_task(
        run_reminder_scheduler(state, interval_seconds=settings.check_interval_seconds),
        name="reminder-scheduler",
    )

    try:
        if settings.console_enabled:
            console = asyncio.create_task(run_console_loop(state), name="console")
            stopper = asyncio.create_task(stop_main.wait(), name="stop-signal")
            await asyncio.wait({console, stopper}, return_when=asyncio.FIRST_COMPLETED)
            for t in (console, stopper):
                t.cancel()
            await asyncio.gather(console, stopper, return_exceptions=True)
        else:
            logger.info("Console disabled. Running reminders only. Press Ctrl+C to stop.")
            await stop_main.wait()
    finally:
        scheduler.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await scheduler
        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError, RuntimeError, ValueError):
                loop.remove_signal_handler(sig)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    try:
        asyncio.run(run_app(state))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
