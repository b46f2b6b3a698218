"""
Dynamic values shared by the evaluator, scope frames and the renderer.

A value is one of: absent (None), the null marker (NULL), bool, int/float,
str, list, dict. Host objects coming from the model pass through untouched.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any


class _NullType:
    """
    Explicit null marker.

    Stored in scope frames to bind a name to "nothing": the binding is found
    (it shadows outer frames and the model) but reads back as absent.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NULL"


NULL = _NullType()


def is_absent(value: Any) -> bool:
    return value is None or value is NULL


def is_number(value: Any) -> bool:
    """int or float, bool excluded."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """
    Boolean coercion used by predicates and logical operators.

    Absent and empty values are false; host objects are true.
    """
    if is_absent(value):
        return False
    if isinstance(value, bool):
        return value
    if is_number(value):
        return value != 0
    if isinstance(value, (str, list, tuple, Mapping)):
        return len(value) > 0
    return True


def _json_default(obj: Any) -> Any:
    if obj is NULL:
        return None
    return str(obj)


def stringify(value: Any) -> str:
    """
    Textual form of a value for output.

    Booleans render as true/false, integral floats without a fraction,
    lists and mappings as JSON (or str() when not JSON-encodable).
    """
    if is_absent(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple, Mapping)):
        try:
            return json.dumps(value, ensure_ascii=False, default=_json_default)
        except (TypeError, ValueError):
            # Non-string keys or circular references
            return str(value)
    return str(value)


__all__ = [
    "NULL",
    "is_absent",
    "is_number",
    "is_truthy",
    "stringify",
]
