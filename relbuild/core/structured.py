"""Helpers for reading untyped TOML tables.

Use these at the config boundary: they validate values at runtime and narrow
types for static checkers.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value, stripped.

    Returns None if missing, not a str, or empty after stripping.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    if isinstance(value, bool):
        return value
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys)."""
    return as_str_dict(table.get(key))


def get_tables(table: Mapping[str, object], key: str) -> list[StrDict] | None:
    """Get an array of tables (``[[key]]`` in TOML).

    Returns None if the key is missing or any element is not a table.
    """
    value = table.get(key)
    if not isinstance(value, list):
        return None
    out: list[StrDict] = []
    for item in cast(list[object], value):
        d = as_str_dict(item)
        if d is None:
            return None
        out.append(d)
    return out
