from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from enum import Enum

from pydantic import ValidationError

from taskvault.errors import FieldWarning, ObjectSyntaxError
from taskvault.models.record import UNTITLED, Priority, Status, TaskRecord

from .coerce import coerce_date, coerce_datetime, coerce_enum
from .fields import extract_int, extract_string
from .parser import parse_object


class CompletionPolicy(str, Enum):
    """How the builder treats a ``status``/``completedAt`` mismatch read from disk."""

    PRESERVE = "preserve"
    NORMALIZE = "normalize"

    @classmethod
    def parse(cls, raw: str | None) -> CompletionPolicy:
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            return cls.PRESERVE


@dataclass(slots=True)
class BuildResult:
    record: TaskRecord | None
    warnings: list[FieldWarning] = field(default_factory=list)
    error: str | None = None

    @property
    def clean(self) -> bool:
        return self.record is not None and not self.warnings


def _apply_policy(
    status: Status,
    completed_at: _dt.datetime | None,
    policy: CompletionPolicy,
    warnings: list[FieldWarning],
) -> _dt.datetime | None:
    if policy is CompletionPolicy.PRESERVE:
        return completed_at
    if status is Status.PENDING and completed_at is not None:
        warnings.append(
            FieldWarning(
                field="completedAt",
                raw=completed_at.isoformat(),
                reason="set on a pending task",
                fallback=None,
            )
        )
        return None
    if status is Status.COMPLETED and completed_at is None:
        warnings.append(
            FieldWarning(field="completedAt", raw="", reason="missing on a completed task")
        )
    return completed_at


def _build(
    object_text: str, policy: CompletionPolicy, now: _dt.datetime | None
) -> BuildResult:
    try:
        obj = parse_object(object_text)
    except ObjectSyntaxError as e:
        return BuildResult(None, error=str(e))

    created_fallback = (now or _dt.datetime.now()).replace(microsecond=0)
    warnings: list[FieldWarning] = []

    record_id = extract_int(obj, "id")
    if record_id <= 0:
        if "id" in obj.pairs:
            warnings.append(
                FieldWarning(
                    field="id",
                    raw=obj.pairs["id"].text,
                    reason="not a positive integer",
                    fallback=1,
                )
            )
        record_id = 1

    title = extract_string(obj, "title")
    if not title.strip():
        title = UNTITLED
    description = extract_string(obj, "description")

    priority = coerce_enum("priority", extract_string(obj, "priority"), Priority, Priority.LOW)
    status = coerce_enum("status", extract_string(obj, "status"), Status, Status.PENDING)
    due_date = coerce_date("dueDate", extract_string(obj, "dueDate"))
    created_at = coerce_datetime("createdAt", extract_string(obj, "createdAt"), created_fallback)
    completed_at = coerce_datetime("completedAt", extract_string(obj, "completedAt"), None)
    for c in (priority, status, due_date, created_at, completed_at):
        if c.warning is not None:
            warnings.append(c.warning)

    completed = _apply_policy(status.value, completed_at.value, policy, warnings)
    try:
        record = TaskRecord(
            id=record_id,
            title=title,
            description=description,
            priority=priority.value,
            due_date=due_date.value,
            status=status.value,
            created_at=created_at.value or created_fallback,
            completed_at=completed,
        )
    except ValidationError as e:
        return BuildResult(None, warnings, error=f"invalid record: {e.error_count()} error(s)")
    return BuildResult(record, warnings)


def build_record(
    object_text: str,
    *,
    policy: CompletionPolicy = CompletionPolicy.PRESERVE,
    now: _dt.datetime | None = None,
) -> BuildResult:
    """Build one TaskRecord from the source text of one object.

    Never raises: a record that cannot be built comes back with
    ``record=None`` and ``error`` set, and the caller drops it.
    """
    try:
        return _build(object_text, policy, now)
    except Exception as e:  # noqa: BLE001
        return BuildResult(None, error=f"{type(e).__name__}: {e}")


__all__ = ["CompletionPolicy", "BuildResult", "build_record"]
