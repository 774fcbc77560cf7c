"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskDraft, TaskUpdate) and the JSON record shape
- task_store.py: SQLite key-value slot holding the whole collection
- task_mutators.py: pure snapshot -> snapshot transitions
- task_scheduler.py: polling scheduler that dispatches due reminders
- task_view.py: tab/filter/search/sort projection for display
- task_export.py: pretty-printed JSON export
- task_api.py: small high-level helpers used by the rest of the app
"""
