from __future__ import annotations

from .lexer import tokenize


def split_objects(array_body: str) -> list[str]:
    """Split the inside of a JSON array into one source slice per top-level object.

    Depth is tracked over tokens, so braces inside quoted strings are ignored.
    Anything between objects (commas, stray scalars) is skipped. An object
    still open at the end of the input is returned as-is, up to the end.
    """
    objects: list[str] = []
    depth = 0
    start = 0
    for tok in tokenize(array_body):
        if tok.kind == "lbrace":
            if depth == 0:
                start = tok.start
            depth += 1
        elif tok.kind == "rbrace" and depth > 0:
            depth -= 1
            if depth == 0:
                objects.append(array_body[start : tok.end])
    if depth > 0:
        objects.append(array_body[start:])
    return objects


__all__ = ["split_objects"]
