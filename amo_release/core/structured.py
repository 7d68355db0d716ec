"""Helpers for safely working with dynamic (untyped) structures.

Use these helpers at boundaries where we ingest JSON responses, plugin
configuration or host environment mappings. They provide runtime validation
and static type narrowing, and never coerce values.
"""

from __future__ import annotations

from typing import TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    """Return obj as StrDict if it matches, else None."""
    if is_str_dict(obj):
        return obj
    return None


def is_obj_list(obj: object) -> TypeGuard[ObjList]:
    """Return True if obj is a list."""
    return isinstance(obj, list)


def is_number(obj: object) -> bool:
    """Return True for int/float values; bool is not a number here."""
    if isinstance(obj, bool):
        return False
    return isinstance(obj, (int, float))


def type_name(obj: object) -> str:
    """Short JSON-flavoured type name, used in validation messages."""
    if obj is None:
        return "null"
    if isinstance(obj, bool):
        return "boolean"
    if is_number(obj):
        return "number"
    if isinstance(obj, str):
        return "string"
    if isinstance(obj, list):
        return "array"
    if isinstance(obj, dict):
        return "object"
    return type(obj).__name__
