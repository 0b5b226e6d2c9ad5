"""JSON value aliases used as the untyped working tree during merge.

Objects are plain dicts (insertion ordered), arrays are lists, and scalars map
to str/int/float/bool/None exactly as the stdlib json module produces them.
"""

from __future__ import annotations

from pathlib import Path
from typing import TypeAlias, Union

JSONScalar: TypeAlias = Union[str, int, float, bool, None]
JSONValue: TypeAlias = Union[JSONScalar, list["JSONValue"], dict[str, "JSONValue"]]
JSONObject: TypeAlias = dict[str, JSONValue]

# Field path (tuple of object keys) -> file that supplied the value.
FieldPath: TypeAlias = tuple[str, ...]
Origins: TypeAlias = dict[FieldPath, Path]


def json_kind(value: object) -> str:
    """Return the JSON kind name of a value, used in error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
