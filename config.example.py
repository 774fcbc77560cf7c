# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo-reminder).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Connectors
    "TODO_CONSOLE_ENABLED": "Run the console REPL (true/false). Without it only reminders run.",
    # Local data
    "TODO_DATA_DIR": "Local data dir (default: .local/todo). Holds the store and todo.log.",
    "TODO_STORE_PATH": "SQLite file (default: <data_dir>/tasks.sqlite3).",
    "TODO_STORAGE_KEY": "Key of the slot holding the task list (default: todo_mvp_tasks_v1).",
    "TODO_EXPORT_DIR": "Where /export writes JSON files (default: <data_dir>/exports).",
    # Reminders
    "TODO_CHECK_INTERVAL_SECONDS": "How often due tasks are checked (default: 30).",
    "TODO_NOTIFY_BACKEND": "console | none (none = notifications unsupported, reminders stay in-app).",
    "TODO_NOTIFY_PERMISSION": "Initial permission: default | granted | denied (default: default).",
    "TODO_NOTIFY_BELL": "Ring the terminal bell with each reminder (true/false).",
}
