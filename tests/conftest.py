from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from taskvault.observability import reset_metrics


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep user configuration out of tests and start every test with fresh counters."""
    for name in (
        "TASKVAULT_FILE",
        "TASKVAULT_COMPLETION_POLICY",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "LOG_MODULE_LEVELS",
        "SERVICE_NAME",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"
