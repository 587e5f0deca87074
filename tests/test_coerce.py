from __future__ import annotations

import datetime as dt

import pytest

from taskvault.codec.coerce import (
    coerce_date,
    coerce_datetime,
    coerce_enum,
    format_date,
    format_datetime,
    parse_date,
    parse_datetime,
)
from taskvault.models.record import Priority, Status

FALLBACK = dt.datetime(2024, 1, 1, 12, 0, 0)


@pytest.mark.parametrize("raw", ["high", " High ", "HIGH"])
def test_enum_case_and_whitespace_insensitive(raw: str) -> None:
    c = coerce_enum("priority", raw, Priority, Priority.LOW)
    assert c.value is Priority.HIGH
    assert c.warning is None


def test_enum_unrecognized_defaults_with_warning() -> None:
    c = coerce_enum("priority", "urgent", Priority, Priority.LOW)
    assert c.value is Priority.LOW
    assert c.warning is not None
    assert c.warning.field == "priority"
    assert c.warning.raw == "urgent"
    assert c.warning.fallback == "LOW"


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_blank_is_absent_without_warning(raw: str | None) -> None:
    assert coerce_enum("status", raw, Status, Status.PENDING) == coerce_enum(
        "status", None, Status, Status.PENDING
    )
    assert coerce_enum("status", raw, Status, Status.PENDING).warning is None
    assert coerce_date("dueDate", raw).value is None
    assert coerce_date("dueDate", raw).warning is None
    assert coerce_datetime("createdAt", raw, FALLBACK).value == FALLBACK
    assert coerce_datetime("createdAt", raw, FALLBACK).warning is None


def test_date_parses_iso() -> None:
    assert coerce_date("dueDate", "2024-02-29").value == dt.date(2024, 2, 29)


@pytest.mark.parametrize("raw", ["2023-02-29", "2024/01/05", "2024-1-5", "tomorrow"])
def test_date_invalid_is_absent_with_warning(raw: str) -> None:
    c = coerce_date("dueDate", raw)
    assert c.value is None
    assert c.warning is not None
    assert c.warning.reason == "invalid date"


def test_datetime_formats() -> None:
    assert parse_datetime("2024-03-04T05:06:07") == dt.datetime(2024, 3, 4, 5, 6, 7)
    assert parse_datetime("2024-03-04T05:06") == dt.datetime(2024, 3, 4, 5, 6)
    assert parse_datetime("2024-03-04T05:06:07.123456789") == dt.datetime(
        2024, 3, 4, 5, 6, 7, 123456
    )
    assert parse_datetime("2024-03-04T05:06:07.5") == dt.datetime(2024, 3, 4, 5, 6, 7, 500000)


@pytest.mark.parametrize("raw", ["2024-03-04", "2024-03-04T25:00:00", "2024-03-04T05:06:07Z"])
def test_datetime_invalid_uses_fallback(raw: str) -> None:
    c = coerce_datetime("createdAt", raw, FALLBACK)
    assert c.value == FALLBACK
    assert c.warning is not None
    assert c.warning.fallback == "2024-01-01T12:00:00"

    absent = coerce_datetime("completedAt", raw, None)
    assert absent.value is None
    assert absent.warning is not None


def test_format_helpers() -> None:
    assert format_date(None) == ""
    assert format_date(dt.date(2024, 5, 1)) == "2024-05-01"
    assert format_datetime(None) == ""
    assert format_datetime(dt.datetime(2024, 5, 1, 9, 30, 0, 999)) == "2024-05-01T09:30:00"


def test_format_helpers_pad_small_years() -> None:
    assert format_date(dt.date(999, 1, 2)) == "0999-01-02"
    assert format_datetime(dt.datetime(45, 3, 4, 5, 6, 7)) == "0045-03-04T05:06:07"
    assert parse_date("0999-01-02") == dt.date(999, 1, 2)
