from __future__ import annotations

import datetime
import os
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from taskvault.codec import (
    CompletionPolicy,
    array_body,
    build_record,
    classify,
    dumps,
    split_objects,
)
from taskvault.config import DEFAULT_TASKS_FILE
from taskvault.errors import FieldWarning, StorageIOError, StructuralError
from taskvault.models.record import Priority, Status, TaskRecord, next_id
from taskvault.observability import get_json_logger, get_metrics

PathLike = str | os.PathLike[str]

_SNIPPET_LEN = 60


@dataclass(slots=True)
class LoadReport:
    """Records read from a tasks file plus everything recovered on the way."""

    records: list[TaskRecord] = field(default_factory=list)
    warnings: list[FieldWarning] = field(default_factory=list)
    dropped: list[FieldWarning] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.warnings and not self.dropped


def _snippet(text: str) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= _SNIPPET_LEN else flat[: _SNIPPET_LEN - 3] + "..."


def save(records: Sequence[TaskRecord], path: PathLike = DEFAULT_TASKS_FILE) -> None:
    """Write ``records`` to ``path`` in one call.

    The file is overwritten in place; there is no temp-file swap, so a failed
    write can leave it truncated.
    """
    logger = get_json_logger("taskvault.store")
    p = Path(path)
    try:
        p.write_text(dumps(records), encoding="utf-8", newline="\n")
    except OSError as e:
        logger.error(
            "save failed",
            extra={"event": "save_failed", "path": str(p), "reason": str(e)[:200]},
        )
        raise StorageIOError(f"Failed to save tasks to {p}: {e}", str(p)) from e
    get_metrics().increment("records_saved", amount=len(records))
    logger.info(
        "tasks saved",
        extra={"event": "tasks_saved", "path": str(p), "records": len(records)},
    )


def load_report(
    path: PathLike = DEFAULT_TASKS_FILE,
    *,
    policy: CompletionPolicy = CompletionPolicy.PRESERVE,
) -> LoadReport:
    """Load ``path`` and report recovered fields and dropped records.

    A missing file is an empty list. Raises StructuralError when the text is
    neither an array nor a ``{"tasks": [...]}`` object, StorageIOError when it
    cannot be read.
    """
    logger = get_json_logger("taskvault.store")
    metrics = get_metrics()
    p = Path(path)
    report = LoadReport()
    if not p.exists():
        logger.info("no tasks file", extra={"event": "tasks_missing", "path": str(p)})
        return report

    started = time.perf_counter()
    try:
        content = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(
            "load failed",
            extra={"event": "load_failed", "path": str(p), "reason": str(e)[:200]},
        )
        raise StorageIOError(f"Failed to read tasks from {p}: {e}", str(p)) from e

    try:
        shape = classify(content)
    except StructuralError as e:
        logger.error(
            "load rejected", extra={"event": "load_rejected", "path": str(p), "reason": str(e)}
        )
        raise

    for index, object_text in enumerate(split_objects(array_body(content, shape))):
        result = build_record(object_text, policy=policy)
        for w in result.warnings:
            warning = w.model_copy(update={"index": index})
            report.warnings.append(warning)
            metrics.increment("fields_recovered", {"field": warning.field})
            logger.warning(
                "field recovered",
                extra={
                    "event": "field_recovered",
                    "path": str(p),
                    "field": warning.field,
                    "raw": warning.raw,
                    "reason": warning.reason,
                },
            )
        if result.record is None:
            report.dropped.append(
                FieldWarning(
                    field="record",
                    raw=_snippet(object_text),
                    reason=result.error or "unbuildable record",
                    index=index,
                )
            )
            metrics.increment("records_dropped")
            logger.warning(
                "record dropped",
                extra={"event": "record_dropped", "path": str(p), "reason": result.error},
            )
            continue
        report.records.append(result.record)

    metrics.increment("records_loaded", amount=len(report.records))
    logger.info(
        "tasks loaded",
        extra={
            "event": "tasks_loaded",
            "path": str(p),
            "records": len(report.records),
            "dropped": len(report.dropped),
            "warnings": len(report.warnings),
            "duration_ms": (time.perf_counter() - started) * 1000.0,
        },
    )
    return report


def load(
    path: PathLike = DEFAULT_TASKS_FILE,
    *,
    policy: CompletionPolicy = CompletionPolicy.PRESERVE,
) -> list[TaskRecord]:
    return load_report(path, policy=policy).records


class TaskStore:
    """Pluggable task store interface.

    Implementations keep records in insertion order and assign ids.
    """

    def list_tasks(self) -> list[TaskRecord]:  # pragma: no cover - interface only
        raise NotImplementedError

    def get_task(self, task_id: int) -> TaskRecord | None:  # pragma: no cover - interface only
        raise NotImplementedError

    def create_task(
        self,
        *,
        title: str,
        description: str = "",
        priority: Priority = Priority.LOW,
        due_date: datetime.date | None = None,
    ) -> TaskRecord:  # pragma: no cover - interface only
        raise NotImplementedError

    def set_status(
        self, task_id: int, status: Status
    ) -> TaskRecord | None:  # pragma: no cover - interface only
        raise NotImplementedError

    def delete_task(self, task_id: int) -> bool:  # pragma: no cover - interface only
        raise NotImplementedError


class FileTaskStore(TaskStore):
    """Task store backed by a single JSON file.

    Every mutation is a full load-modify-save cycle. There is no locking:
    two processes writing the same file can lose each other's changes.
    """

    def __init__(
        self,
        path: PathLike = DEFAULT_TASKS_FILE,
        *,
        policy: CompletionPolicy = CompletionPolicy.PRESERVE,
    ) -> None:
        self.path = Path(path)
        self.policy = policy

    def load_report(self) -> LoadReport:
        return load_report(self.path, policy=self.policy)

    def list_tasks(self) -> list[TaskRecord]:
        return load(self.path, policy=self.policy)

    def replace_all(self, records: Sequence[TaskRecord]) -> None:
        save(records, self.path)

    def get_task(self, task_id: int) -> TaskRecord | None:
        for r in self.list_tasks():
            if r.id == task_id:
                return r
        return None

    def create_task(
        self,
        *,
        title: str,
        description: str = "",
        priority: Priority = Priority.LOW,
        due_date: datetime.date | None = None,
    ) -> TaskRecord:
        records = self.list_tasks()
        task = TaskRecord.new(
            next_id(records),
            title,
            description=description,
            priority=priority,
            due_date=due_date,
        )
        records.append(task)
        save(records, self.path)
        return task

    def set_status(self, task_id: int, status: Status) -> TaskRecord | None:
        records = self.list_tasks()
        for i, r in enumerate(records):
            if r.id == task_id:
                records[i] = r.with_status(status)
                save(records, self.path)
                return records[i]
        return None

    def delete_task(self, task_id: int) -> bool:
        records = self.list_tasks()
        kept = [r for r in records if r.id != task_id]
        if len(kept) == len(records):
            return False
        save(kept, self.path)
        return True


__all__ = ["LoadReport", "save", "load", "load_report", "TaskStore", "FileTaskStore"]
