"""Path lookups over dynamic (schema-less) Kubernetes objects.

Dynamic objects are the plain ``dict`` trees returned by the dynamic client
or the ``raw_object`` of a watch event, with camelCase keys.  Every lookup
returns ``(value, found)``: an absent path (or an explicit JSON ``null``)
yields ``found=False``, while a value of the wrong type raises
:class:`ResourceConstructionError`.  Callers decide whether absence is fatal
(``required_*``) or falls back to a default.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class ResourceConstructionError(Exception):
    """A raw object cannot be turned into a resource record.

    Raised when a required field is missing, a present field has the wrong
    shape, or a timestamp is not RFC3339.  The whole construction is
    aborted; no partial record is ever returned.
    """

    def __init__(self, field_path: str, value: Any, reason: str, kind: str = "") -> None:
        self.field_path = field_path
        self.value = value
        self.reason = reason
        self.kind = kind
        super().__init__(field_path, value, reason, kind)

    def __str__(self) -> str:
        prefix = f"{self.kind}: " if self.kind else ""
        return f"{prefix}{self.field_path}: {self.reason} (value={self.value!r})"


def _path(fields: tuple[str, ...]) -> str:
    return ".".join(fields)


def nested_field(obj: Mapping[str, Any], *fields: str) -> tuple[Any, bool]:
    """Return the value at *fields* and whether it was found."""
    current: Any = obj
    for i, key in enumerate(fields):
        if not isinstance(current, Mapping):
            raise ResourceConstructionError(
                _path(fields[:i]), current, f"expected a map, got {type(current).__name__}"
            )
        if key not in current or current[key] is None:
            return None, False
        current = current[key]
    return current, True


def nested_string(obj: Mapping[str, Any], *fields: str) -> tuple[str, bool]:
    value, found = nested_field(obj, *fields)
    if not found:
        return "", False
    if not isinstance(value, str):
        raise ResourceConstructionError(_path(fields), value, f"expected a string, got {type(value).__name__}")
    return value, True


def required_string(obj: Mapping[str, Any], *fields: str) -> str:
    """Return a non-empty string at *fields* or raise."""
    value, found = nested_string(obj, *fields)
    if not found or not value:
        raise ResourceConstructionError(_path(fields), value if found else None, "required field is missing")
    return value


def nested_int(obj: Mapping[str, Any], *fields: str) -> tuple[int, bool]:
    value, found = nested_field(obj, *fields)
    if not found:
        return 0, False
    # bool is an int subclass; JSON true/false is never a count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ResourceConstructionError(_path(fields), value, f"expected an integer, got {type(value).__name__}")
    return value, True


def nested_bool(obj: Mapping[str, Any], *fields: str) -> tuple[bool, bool]:
    value, found = nested_field(obj, *fields)
    if not found:
        return False, False
    if not isinstance(value, bool):
        raise ResourceConstructionError(_path(fields), value, f"expected a boolean, got {type(value).__name__}")
    return value, True


def nested_string_map(obj: Mapping[str, Any], *fields: str) -> tuple[dict[str, str], bool]:
    """Return a ``str -> str`` mapping; any non-string key or value is fatal."""
    value, found = nested_field(obj, *fields)
    if not found:
        return {}, False
    if not isinstance(value, Mapping):
        raise ResourceConstructionError(_path(fields), value, f"expected a map, got {type(value).__name__}")
    result: dict[str, str] = {}
    for k, v in value.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise ResourceConstructionError(f"{_path(fields)}.{k}", v, "expected string keys and values")
        result[k] = v
    return result, True


def nested_slice(obj: Mapping[str, Any], *fields: str) -> tuple[list[Any], bool]:
    value, found = nested_field(obj, *fields)
    if not found:
        return [], False
    if not isinstance(value, list):
        raise ResourceConstructionError(_path(fields), value, f"expected a list, got {type(value).__name__}")
    return value, True


def nested_string_slice(obj: Mapping[str, Any], *fields: str) -> tuple[list[str], bool]:
    values, found = nested_slice(obj, *fields)
    for i, item in enumerate(values):
        if not isinstance(item, str):
            raise ResourceConstructionError(f"{_path(fields)}[{i}]", item, "expected a string")
    return values, found


def nested_maps(obj: Mapping[str, Any], *fields: str) -> list[Mapping[str, Any]]:
    """Return a list of maps (e.g. ``spec.containers``); absence yields ``[]``."""
    values, _ = nested_slice(obj, *fields)
    for i, item in enumerate(values):
        if not isinstance(item, Mapping):
            raise ResourceConstructionError(f"{_path(fields)}[{i}]", item, "expected a map")
    return values


def nested_quantity(obj: Mapping[str, Any], *fields: str) -> tuple[str, bool]:
    """Return a resource quantity (``"10Gi"``, or a bare number) as a string."""
    value, found = nested_field(obj, *fields)
    if not found:
        return "", False
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ResourceConstructionError(_path(fields), value, f"expected a quantity, got {type(value).__name__}")
    return str(value), True
