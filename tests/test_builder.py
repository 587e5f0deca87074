from __future__ import annotations

import datetime as dt

import pytest

from taskvault.codec.builder import BuildResult, CompletionPolicy, build_record
from taskvault.models.record import UNTITLED, Priority, Status

NOW = dt.datetime(2024, 6, 1, 8, 0, 0, 123456)

FULL = """{
    "id": 4,
    "title": "Pay rent",
    "description": "Before the 5th\\nby transfer",
    "priority": "high",
    "dueDate": "2024-06-05",
    "status": "COMPLETED",
    "createdAt": "2024-05-30T10:00:00",
    "completedAt": "2024-06-01T07:59:00"
}"""


def _build(text: str, policy: CompletionPolicy = CompletionPolicy.PRESERVE) -> BuildResult:
    return build_record(text, policy=policy, now=NOW)


def test_full_record_is_clean() -> None:
    result = _build(FULL)
    assert result.clean
    r = result.record
    assert r is not None
    assert r.id == 4
    assert r.title == "Pay rent"
    assert r.description == "Before the 5th\nby transfer"
    assert r.priority is Priority.HIGH
    assert r.due_date == dt.date(2024, 6, 5)
    assert r.status is Status.COMPLETED
    assert r.created_at == dt.datetime(2024, 5, 30, 10, 0, 0)
    assert r.completed_at == dt.datetime(2024, 6, 1, 7, 59, 0)


def test_empty_object_defaults() -> None:
    result = _build("{}")
    assert result.clean
    r = result.record
    assert r is not None
    assert r.id == 1
    assert r.title == UNTITLED
    assert r.description == ""
    assert r.priority is Priority.LOW
    assert r.status is Status.PENDING
    assert r.due_date is None
    assert r.completed_at is None
    assert r.created_at == NOW.replace(microsecond=0)


def test_created_at_defaults_to_current_time() -> None:
    before = dt.datetime.now().replace(microsecond=0)
    r = build_record("{}").record
    after = dt.datetime.now()
    assert r is not None
    assert before <= r.created_at <= after


def test_unrecognized_priority_recovers_with_warning() -> None:
    result = _build('{"id": 2, "title": "t", "priority": "urgent"}')
    assert result.record is not None
    assert result.record.priority is Priority.LOW
    assert not result.clean
    assert [w.field for w in result.warnings] == ["priority"]


def test_invalid_due_date_keeps_other_fields() -> None:
    result = _build('{"id": 2, "title": "t", "priority": "MEDIUM", "dueDate": "31/12/2024"}')
    r = result.record
    assert r is not None
    assert r.due_date is None
    assert r.title == "t"
    assert r.priority is Priority.MEDIUM
    assert [w.field for w in result.warnings] == ["dueDate"]


def test_non_positive_id_defaults_to_one() -> None:
    result = _build('{"id": -5, "title": "t"}')
    assert result.record is not None
    assert result.record.id == 1
    assert [w.field for w in result.warnings] == ["id"]


def test_id_out_of_range_drops_record() -> None:
    result = _build('{"id": 99999999999, "title": "t"}')
    assert result.record is None
    assert result.error


def test_unterminated_string_drops_record() -> None:
    result = _build('{"id": 1, "title": "broken')
    assert result.record is None
    assert result.error is not None
    assert "unterminated" in result.error


def test_preserve_policy_keeps_inconsistent_completion() -> None:
    text = '{"id": 1, "title": "t", "status": "PENDING", "completedAt": "2024-01-01T00:00:00"}'
    result = _build(text)
    assert result.clean
    assert result.record is not None
    assert result.record.status is Status.PENDING
    assert result.record.completed_at == dt.datetime(2024, 1, 1)


def test_normalize_policy_clears_completion_on_pending() -> None:
    text = '{"id": 1, "title": "t", "status": "PENDING", "completedAt": "2024-01-01T00:00:00"}'
    result = _build(text, policy=CompletionPolicy.NORMALIZE)
    assert result.record is not None
    assert result.record.completed_at is None
    assert [w.field for w in result.warnings] == ["completedAt"]


def test_normalize_policy_does_not_invent_completion_time() -> None:
    text = '{"id": 1, "title": "t", "status": "COMPLETED"}'
    result = _build(text, policy=CompletionPolicy.NORMALIZE)
    assert result.record is not None
    assert result.record.status is Status.COMPLETED
    assert result.record.completed_at is None
    assert result.warnings[0].reason == "missing on a completed task"


def test_completion_policy_parse() -> None:
    assert CompletionPolicy.parse("Normalize") is CompletionPolicy.NORMALIZE
    assert CompletionPolicy.parse(None) is CompletionPolicy.PRESERVE
    assert CompletionPolicy.parse("whatever") is CompletionPolicy.PRESERVE


def test_non_ascii_digit_id_defaults_to_one() -> None:
    result = _build('{"id": \u00b2, "title": "t"}')
    r = result.record
    assert r is not None
    assert r.id == 1
    assert r.title == "t"


def test_decimal_id_is_not_truncated() -> None:
    result = _build('{"id": 5.0, "title": "t"}')
    assert result.record is not None
    assert result.record.id == 1
    assert [(w.field, w.raw) for w in result.warnings] == [("id", "5.0")]


@pytest.mark.parametrize("raw", ['""', '"   "', '"\\t\\n"'])
def test_blank_title_falls_back_to_untitled(raw: str) -> None:
    result = _build(f'{{"id": 1, "title": {raw}}}')
    assert result.record is not None
    assert result.record.title == UNTITLED
    assert result.clean


def test_title_is_not_stripped() -> None:
    result = _build('{"id": 1, "title": "  padded  "}')
    assert result.record is not None
    assert result.record.title == "  padded  "
