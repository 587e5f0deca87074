from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from taskvault.errors import ObjectSyntaxError

from .lexer import Token, tokenize
from .text import unescape

ValueKind = Literal["string", "number", "word", "object", "array"]

_OPENERS = {"lbrace": "rbrace", "lbracket": "rbracket"}


@dataclass(frozen=True, slots=True)
class RawValue:
    """An uncoerced value. Strings keep their escapes; nested values keep their source text."""

    kind: ValueKind
    text: str


@dataclass(slots=True)
class RawObject:
    """Top-level pairs of one object, first occurrence of each key wins."""

    pairs: dict[str, RawValue] = field(default_factory=dict)
    issues: list[str] = field(default_factory=list)

    def string(self, key: str) -> str | None:
        value = self.pairs.get(key)
        if value is None or value.kind != "string":
            return None
        return unescape(value.text)

    def integer(self, key: str) -> int | None:
        value = self.pairs.get(key)
        if value is None or value.kind != "number" or "." in value.text:
            return None
        return int(value.text)


def strip_braces(text: str) -> str:
    """Remove one layer of surrounding braces, each side independently."""
    body = text.strip()
    if body.startswith("{"):
        body = body[1:]
    if body.endswith("}"):
        body = body[:-1]
    return body


def _skip_nested(tokens: list[Token], start: int) -> int | None:
    """Return the index of the token closing the value opened at ``start``."""
    stack: list[str] = []
    for i in range(start, len(tokens)):
        kind = tokens[i].kind
        if kind in _OPENERS:
            stack.append(_OPENERS[kind])
        elif stack and kind == stack[-1]:
            stack.pop()
            if not stack:
                return i
    return None


def parse_object_body(body: str) -> RawObject:
    """Parse ``"key": value`` pairs from the inside of one object.

    Lenient: commas are optional, and a malformed pair is recorded in
    ``issues`` and skipped. Only an unterminated string is fatal.
    """
    tokens = list(tokenize(body))
    if tokens and tokens[-1].kind == "error" and tokens[-1].text.startswith('"'):
        raise ObjectSyntaxError("unterminated string", tokens[-1].start)

    obj = RawObject()
    pos = 0
    n = len(tokens)
    while pos < n:
        tok = tokens[pos]
        if tok.kind == "comma":
            pos += 1
            continue
        if tok.kind != "string" or pos + 1 >= n or tokens[pos + 1].kind != "colon":
            obj.issues.append(f"unexpected {tok.kind} {tok.text!r} at offset {tok.start}")
            pos += 1
            continue

        key = unescape(tok.text)
        pos += 2
        if pos >= n:
            obj.issues.append(f"missing value for {key!r}")
            break
        vtok = tokens[pos]
        value: RawValue | None = None
        if vtok.kind in ("string", "number", "word"):
            value = RawValue(vtok.kind, vtok.text)
            pos += 1
        elif vtok.kind in _OPENERS:
            close = _skip_nested(tokens, pos)
            if close is None:
                obj.issues.append(f"unterminated value for {key!r}")
                break
            kind: ValueKind = "object" if vtok.kind == "lbrace" else "array"
            value = RawValue(kind, body[vtok.start : tokens[close].end])
            pos = close + 1
        else:
            # Leave the token in place so a following key can still be read
            obj.issues.append(f"missing value for {key!r}")
            continue

        if key not in obj.pairs:
            obj.pairs[key] = value
    return obj


def parse_object(text: str) -> RawObject:
    return parse_object_body(strip_braces(text))


__all__ = [
    "RawValue",
    "RawObject",
    "strip_braces",
    "parse_object_body",
    "parse_object",
]
