from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal

TokenKind = Literal[
    "lbrace",
    "rbrace",
    "lbracket",
    "rbracket",
    "colon",
    "comma",
    "string",
    "number",
    "word",
    "error",
]

_PUNCT: dict[str, TokenKind] = {
    "{": "lbrace",
    "}": "rbrace",
    "[": "lbracket",
    "]": "rbracket",
    ":": "colon",
    ",": "comma",
}


@dataclass(frozen=True, slots=True)
class Token:
    """One lexical token.

    For strings ``text`` is the raw inner text (quotes removed, escapes kept);
    ``start``/``end`` always span the token in the source, quotes included.
    """

    kind: TokenKind
    text: str
    start: int
    end: int


def _scan_string(text: str, start: int) -> int:
    """Return the index just past the closing quote, or -1 if unterminated."""
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i + 1
        i += 1
    return -1


def _is_digit(ch: str) -> bool:
    # ASCII only; str.isdigit() also accepts superscripts and other scripts
    return "0" <= ch <= "9"


def _scan_number(text: str, start: int) -> int:
    i = start
    n = len(text)
    if text[i] == "-":
        i += 1
    while i < n and _is_digit(text[i]):
        i += 1
    if i + 1 < n and text[i] == "." and _is_digit(text[i + 1]):
        i += 1
        while i < n and _is_digit(text[i]):
            i += 1
    return i


def tokenize(text: str) -> Iterator[Token]:
    """Yield tokens for ``text``; never raises.

    Malformed input produces ``error`` tokens. An unterminated string yields
    one ``error`` token covering the rest of the input and ends the stream.
    """
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        kind = _PUNCT.get(ch)
        if kind is not None:
            yield Token(kind, ch, i, i + 1)
            i += 1
            continue
        if ch == '"':
            end = _scan_string(text, i)
            if end < 0:
                yield Token("error", text[i:], i, n)
                return
            yield Token("string", text[i + 1 : end - 1], i, end)
            i = end
            continue
        if _is_digit(ch) or (ch == "-" and i + 1 < n and _is_digit(text[i + 1])):
            end = _scan_number(text, i)
            yield Token("number", text[i:end], i, end)
            i = end
            continue
        if ch.isalpha() or ch == "_":
            end = i + 1
            while end < n and (text[end].isalnum() or text[end] == "_"):
                end += 1
            yield Token("word", text[i:end], i, end)
            i = end
            continue
        yield Token("error", ch, i, i + 1)
        i += 1


__all__ = ["Token", "TokenKind", "tokenize"]
