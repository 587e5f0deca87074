"""Hand-rolled JSON codec for the tasks file."""

from __future__ import annotations

from .builder import BuildResult, CompletionPolicy, build_record
from .fields import extract_int, extract_string
from .splitter import split_objects
from .text import escape, unescape
from .validator import Shape, array_body, classify
from .writer import dumps

__all__ = [
    "BuildResult",
    "CompletionPolicy",
    "Shape",
    "array_body",
    "build_record",
    "classify",
    "dumps",
    "escape",
    "extract_int",
    "extract_string",
    "split_objects",
    "unescape",
]
