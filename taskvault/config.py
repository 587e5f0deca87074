from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from taskvault.codec.builder import CompletionPolicy

DEFAULT_TASKS_FILE = "tasks.json"


@dataclass(slots=True)
class StoreConfig:
    path: str
    completion_policy: CompletionPolicy


def load_config(env: dict[str, str] | None = None) -> StoreConfig:
    e: dict[str, Any] = dict(os.environ)
    if env:
        e.update(env)
    path = (e.get("TASKVAULT_FILE") or "").strip() or DEFAULT_TASKS_FILE
    return StoreConfig(
        path=path,
        completion_policy=CompletionPolicy.parse(e.get("TASKVAULT_COMPLETION_POLICY")),
    )


__all__ = ["DEFAULT_TASKS_FILE", "StoreConfig", "load_config"]
