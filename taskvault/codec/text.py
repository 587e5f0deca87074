from __future__ import annotations

# Order matters: backslash first so the escapes it introduces are not re-escaped
_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)

_UNESCAPES: dict[str, str] = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def escape(value: str | None) -> str:
    s = value or ""
    for raw, escaped in _ESCAPES:
        s = s.replace(raw, escaped)
    return s


def unescape(value: str | None) -> str:
    """Decode the escapes produced by ``escape``.

    Single left-to-right pass, so ``\\\\n`` becomes a backslash followed by
    ``n`` rather than a newline. Any other escape is kept verbatim.
    """
    s = value or ""
    if "\\" not in s:
        return s
    out: list[str] = []
    i = 0
    n = len(s)
    while i < n:
        ch = s[i]
        if ch == "\\" and i + 1 < n and s[i + 1] in _UNESCAPES:
            out.append(_UNESCAPES[s[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


__all__ = ["escape", "unescape"]
