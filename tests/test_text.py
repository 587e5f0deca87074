from __future__ import annotations

import pytest

from taskvault.codec.text import escape, unescape


@pytest.mark.parametrize(
    ("raw", "escaped"),
    [
        ("plain", "plain"),
        ('say "hi"', 'say \\"hi\\"'),
        ("a\\b", "a\\\\b"),
        ("line1\nline2", "line1\\nline2"),
        ("tab\there\r", "tab\\there\\r"),
    ],
)
def test_escape(raw: str, escaped: str) -> None:
    assert escape(raw) == escaped
    assert unescape(escaped) == raw


def test_escape_backslash_first_avoids_double_escaping() -> None:
    assert escape('\\"') == '\\\\\\"'


def test_unescape_is_single_pass() -> None:
    # An escaped backslash followed by "n" is not a newline
    assert unescape("C:\\\\new") == "C:\\new"


def test_unescape_keeps_unknown_escapes() -> None:
    assert unescape("\\u0041\\/") == "\\u0041\\/"
    assert unescape("trailing\\") == "trailing\\"


def test_none_is_empty() -> None:
    assert escape(None) == ""
    assert unescape(None) == ""
