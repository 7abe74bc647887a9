"""Shared helpers for reading validated values out of raw config mappings.

Every error names the full dotted key (``search.default_limit``) so a bad
config file can be fixed without reading code. Wrong types raise
``TypeError``; missing keys raise ``ValueError``.
"""

from __future__ import annotations

from typing import Any, Mapping

_TYPE_NAMES: dict[type, str] = {
    str: "a string",
    bool: "a boolean",
    int: "an integer",
    list: "a list",
}


def section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Return the top-level mapping ``raw[key]``."""
    value = raw.get(key)
    if value is None:
        raise ValueError(f"Missing required config: {key}")
    if not isinstance(value, Mapping):
        raise TypeError(f"{key} must be an object")
    return value


def required(values: Mapping[str, Any], key: str, expected: type) -> Any:
    """Return ``values[field]`` checked against ``expected``.

    Args:
        values: Section mapping.
        key: Dotted config key; its last component is the field name.
        expected: Required Python type. ``bool`` never satisfies ``int``.
    """
    field = key.rsplit(".", 1)[-1]
    if field not in values:
        raise ValueError(f"Missing required config: {key}")
    return expect(values[field], key, expected)


def expect(value: Any, key: str, expected: type) -> Any:
    if expected is int and isinstance(value, bool):
        raise TypeError(f"{key} must be {_TYPE_NAMES[int]}")
    if not isinstance(value, expected):
        raise TypeError(f"{key} must be {_TYPE_NAMES.get(expected, expected.__name__)}")
    return value


def expect_str_list(value: Any, key: str) -> list[str]:
    """Validate a list of strings, naming the offending index on failure."""
    for idx, item in enumerate(expect(value, key, list)):
        expect(item, f"{key}[{idx}]", str)
    return list(value)
