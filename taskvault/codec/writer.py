from __future__ import annotations

from collections.abc import Sequence

from taskvault.models.record import TaskRecord

from .coerce import format_date, format_datetime
from .text import escape


def _record_lines(record: TaskRecord) -> list[str]:
    fields = [
        f'"id": {record.id}',
        f'"title": "{escape(record.title)}"',
        f'"description": "{escape(record.description)}"',
        f'"priority": "{record.priority.value}"',
        f'"dueDate": "{format_date(record.due_date)}"',
        f'"status": "{record.status.value}"',
        f'"createdAt": "{format_datetime(record.created_at)}"',
        f'"completedAt": "{format_datetime(record.completed_at)}"',
    ]
    body = ",\n".join(f"    {f}" for f in fields)
    return ["  {", body, "  }"]


def dumps(records: Sequence[TaskRecord]) -> str:
    """Render records as a two-space indented JSON array with a trailing newline."""
    blocks = ["\n".join(_record_lines(r)) for r in records]
    if not blocks:
        return "[\n]\n"
    return "[\n" + ",\n".join(blocks) + "\n]\n"


__all__ = ["dumps"]
