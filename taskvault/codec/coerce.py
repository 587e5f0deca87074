from __future__ import annotations

import datetime as _dt
import re
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from taskvault.errors import FieldWarning

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
# ISO local date-time; seconds and fraction optional, no offset
_DATETIME_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2})(?::(\d{2})(?:\.(\d{1,9}))?)?", re.ASCII
)


@dataclass(frozen=True, slots=True)
class Coerced(Generic[T]):
    value: T
    warning: FieldWarning | None = None


def parse_date(raw: str) -> _dt.date:
    m = _DATE_RE.fullmatch(raw.strip())
    if m is None:
        raise ValueError(f"not an ISO date: {raw!r}")
    year, month, day = (int(g) for g in m.groups())
    return _dt.date(year, month, day)


def parse_datetime(raw: str) -> _dt.datetime:
    m = _DATETIME_RE.fullmatch(raw.strip())
    if m is None:
        raise ValueError(f"not an ISO local date-time: {raw!r}")
    year, month, day, hour, minute = (int(g) for g in m.groups()[:5])
    second = int(m.group(6) or 0)
    fraction = m.group(7) or ""
    micro = int(fraction[:6].ljust(6, "0")) if fraction else 0
    return _dt.datetime(year, month, day, hour, minute, second, micro)


def format_date(value: _dt.date | None) -> str:
    return value.isoformat() if value is not None else ""


def format_datetime(value: _dt.datetime | None) -> str:
    return value.isoformat(timespec="seconds") if value is not None else ""


def coerce_enum(field: str, raw: str | None, enum_type: type[E], default: E) -> Coerced[E]:
    if raw is None or not raw.strip():
        return Coerced(default)
    name = raw.strip().upper()
    member = enum_type.__members__.get(name)
    if member is not None:
        return Coerced(member)
    return Coerced(
        default,
        FieldWarning(field=field, raw=raw, reason="unrecognized value", fallback=default.name),
    )


def coerce_date(field: str, raw: str | None) -> Coerced[_dt.date | None]:
    if raw is None or not raw.strip():
        return Coerced(None)
    try:
        return Coerced(parse_date(raw))
    except ValueError:
        return Coerced(None, FieldWarning(field=field, raw=raw, reason="invalid date"))


def coerce_datetime(
    field: str, raw: str | None, fallback: _dt.datetime | None
) -> Coerced[_dt.datetime | None]:
    """Parse a timestamp, substituting ``fallback`` when blank or unparseable."""
    if raw is None or not raw.strip():
        return Coerced(fallback)
    try:
        return Coerced(parse_datetime(raw))
    except ValueError:
        shown = format_datetime(fallback) if fallback is not None else None
        return Coerced(
            fallback,
            FieldWarning(field=field, raw=raw, reason="invalid timestamp", fallback=shown),
        )


__all__ = [
    "Coerced",
    "parse_date",
    "parse_datetime",
    "format_date",
    "format_datetime",
    "coerce_enum",
    "coerce_date",
    "coerce_datetime",
]
