from __future__ import annotations

import datetime as _dt
from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

UNTITLED = "Untitled Task"
MAX_ID = 2**31 - 1


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Status(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


def _now() -> _dt.datetime:
    # Local wall-clock time at the precision the file format stores
    return _dt.datetime.now().replace(microsecond=0)


class TaskRecord(BaseModel):
    """A single task as persisted in the tasks file.

    - Records are immutable; status changes go through ``with_status``
    - ``title`` holds at least one non-whitespace character
    - ``completed_at`` is meant to be set iff ``status`` is COMPLETED, but a
      record read back from disk may violate this (see CompletionPolicy)
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, le=MAX_ID)
    title: str = Field(min_length=1, pattern=r"\S")
    description: str = ""
    priority: Priority = Priority.LOW
    due_date: _dt.date | None = None
    status: Status = Status.PENDING
    created_at: _dt.datetime = Field(default_factory=_now)
    completed_at: _dt.datetime | None = None

    @classmethod
    def new(
        cls,
        id: int,
        title: str,
        description: str = "",
        priority: Priority = Priority.LOW,
        due_date: _dt.date | None = None,
    ) -> TaskRecord:
        return cls(
            id=id,
            title=title,
            description=description,
            priority=priority,
            due_date=due_date,
        )

    def with_status(self, status: Status) -> TaskRecord:
        if status is Status.COMPLETED:
            completed_at = self.completed_at or _now()
        else:
            completed_at = None
        return self.model_copy(update={"status": status, "completed_at": completed_at})

    def is_overdue(self, today: _dt.date | None = None) -> bool:
        today = today or _dt.date.today()
        return self.status is Status.PENDING and self.due_date is not None and self.due_date < today

    def is_due_today(self, today: _dt.date | None = None) -> bool:
        today = today or _dt.date.today()
        return self.due_date is not None and self.due_date == today


def next_id(records: Iterable[TaskRecord]) -> int:
    """Return one past the highest id in ``records`` (1 when empty)."""
    highest = 0
    for r in records:
        highest = max(highest, r.id)
    return highest + 1


__all__ = ["Priority", "Status", "TaskRecord", "UNTITLED", "MAX_ID", "next_id"]
