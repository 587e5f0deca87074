from __future__ import annotations

from enum import Enum

from taskvault.errors import StructuralError

EXPECTED_SHAPES = 'expected an array [{...}, {...}] or an object {"tasks": [...]}'


class Shape(str, Enum):
    ARRAY = "array"
    OBJECT = "object"


def classify(text: str) -> Shape:
    """Classify whole-file text as one of the two accepted top-level shapes."""
    content = text.strip()
    if content.startswith("[") and content.endswith("]"):
        return Shape.ARRAY
    if content.startswith("{") and content.endswith("}") and '"tasks"' in content:
        return Shape.OBJECT
    if not content:
        raise StructuralError(f"Invalid task file: file is empty; {EXPECTED_SHAPES}")
    raise StructuralError(f"Invalid task file structure: {EXPECTED_SHAPES}")


def array_body(text: str, shape: Shape) -> str:
    """Return the text inside the task array for an already classified ``text``."""
    content = text.strip()
    if shape is Shape.ARRAY:
        return content[1:-1].strip()
    start = content.find("[")
    end = content.rfind("]")
    if start == -1 or end <= start:
        return ""
    return content[start + 1 : end].strip()


__all__ = ["Shape", "EXPECTED_SHAPES", "classify", "array_body"]
