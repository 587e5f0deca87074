from __future__ import annotations

from .parser import RawObject, parse_object


def _as_object(obj: str | RawObject) -> RawObject:
    return obj if isinstance(obj, RawObject) else parse_object(obj)


def extract_string(obj: str | RawObject, key: str) -> str:
    """Return the unescaped string stored under ``key``, or ``""``.

    Missing keys and values of another kind both give the empty string.
    """
    value = _as_object(obj).string(key)
    return value if value is not None else ""


def extract_int(obj: str | RawObject, key: str) -> int:
    """Return the integer stored under ``key``, or ``0``."""
    value = _as_object(obj).integer(key)
    return value if value is not None else 0


__all__ = ["extract_string", "extract_int"]
