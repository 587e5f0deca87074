from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class TaskVaultError(Exception):
    """Base class for errors raised by taskvault."""


class StructuralError(TaskVaultError):
    """Top-level file text matches neither accepted shape; the whole load is aborted."""


class StorageIOError(TaskVaultError):
    """The tasks file could not be read or written. ``__cause__`` holds the OS error."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class ObjectSyntaxError(TaskVaultError):
    """A single object body could not be parsed. Only ever seen by the record builder."""

    def __init__(self, message: str, pos: int) -> None:
        super().__init__(f"{message} at offset {pos}")
        self.pos = pos


class FieldWarning(BaseModel):
    """A recovered field or record, reported as data rather than raised."""

    field: str
    raw: str
    reason: str
    fallback: Any = None
    index: int | None = None

    def describe(self) -> str:
        where = f"task #{self.index + 1} " if self.index is not None else ""
        return f"{where}{self.field}: {self.reason} (raw={self.raw!r}, using {self.fallback!r})"


__all__ = [
    "TaskVaultError",
    "StructuralError",
    "StorageIOError",
    "ObjectSyntaxError",
    "FieldWarning",
]
