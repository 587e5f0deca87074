"""Persist task lists to a human-readable JSON file and read them back leniently."""

from __future__ import annotations

from taskvault.codec import CompletionPolicy
from taskvault.config import DEFAULT_TASKS_FILE
from taskvault.errors import FieldWarning, StorageIOError, StructuralError, TaskVaultError
from taskvault.models.record import Priority, Status, TaskRecord, next_id
from taskvault.store import FileTaskStore, LoadReport, TaskStore, load, load_report, save

__all__ = [
    "CompletionPolicy",
    "DEFAULT_TASKS_FILE",
    "FieldWarning",
    "FileTaskStore",
    "LoadReport",
    "Priority",
    "Status",
    "StorageIOError",
    "StructuralError",
    "TaskRecord",
    "TaskStore",
    "TaskVaultError",
    "load",
    "load_report",
    "next_id",
    "save",
]
