"""Merge a resolved parent config tree into a child config tree.

Rules:
- objects present on both sides merge key by key, recursively;
- any other child value (scalar, array, null, or a type mismatch) replaces
  the parent's value wholesale;
- keys missing from the child are inherited from the parent;
- file-selection keys and references are always replaced wholesale.
"""

from __future__ import annotations

import copy
from pathlib import Path

from tsconfig_resolver.models.json_value import FieldPath, JSONObject, JSONValue, Origins

EXTENDS_KEY = "extends"

REPLACE_WHOLESALE_KEYS = frozenset({"files", "include", "exclude", "references"})


def strip_extends(tree: JSONObject) -> JSONObject:
    """Return a shallow copy of tree without its ``extends`` field."""
    return {key: value for key, value in tree.items() if key != EXTENDS_KEY}


def collect_origins(tree: JSONObject, source: Path, prefix: FieldPath = ()) -> Origins:
    """Attribute every leaf of tree to source.

    Non-empty objects are descended into; everything else (including empty
    objects) is a leaf.
    """
    origins: Origins = {}
    for key, value in tree.items():
        field = (*prefix, key)
        if isinstance(value, dict) and value:
            origins.update(collect_origins(value, source, field))
        else:
            origins[field] = source
    return origins


def _purge(origins: Origins, field: FieldPath) -> None:
    size = len(field)
    for key in [k for k in origins if k[:size] == field]:
        del origins[key]


def _merge_objects(
    parent: JSONObject,
    child: JSONObject,
    origins: Origins | None,
    prefix: FieldPath,
) -> JSONObject:
    merged: JSONObject = dict(parent)

    for key, child_value in child.items():
        field = (*prefix, key)
        parent_value = merged.get(key)

        if (
            isinstance(parent_value, dict)
            and isinstance(child_value, dict)
            and not (not prefix and key in REPLACE_WHOLESALE_KEYS)
        ):
            if origins is not None and child_value:
                origins.pop(field, None)
            merged[key] = _merge_objects(parent_value, child_value, origins, field)
        else:
            if origins is not None and key in merged:
                _purge(origins, field)
            merged[key] = child_value

    return merged


def merge_config_trees(parent: JSONObject, child: JSONObject) -> JSONObject:
    """Fold parent into child; the child wins on every conflict.

    Neither input is modified and the result shares no mutable values with
    them. The child's own ``extends`` field is not carried into the result.
    """
    return copy.deepcopy(_merge_objects(parent, strip_extends(child), None, ()))


def merge_with_origins(
    parent: JSONObject,
    child: JSONObject,
    parent_origins: Origins,
    child_origins: Origins,
) -> tuple[JSONObject, Origins]:
    """Merge like merge_config_trees and track where each leaf came from.

    Args:
        parent: Fully resolved parent tree.
        child: Child tree (its ``extends`` is ignored).
        parent_origins: Leaf attribution for parent.
        child_origins: Leaf attribution for child.

    Returns:
        Tuple of (merged tree, merged origins). Parent attributions under any
        subtree the child replaced are dropped.
    """
    origins = dict(parent_origins)
    merged = _merge_objects(parent, strip_extends(child), origins, ())

    for field, source in child_origins.items():
        if field[:1] == (EXTENDS_KEY,):
            continue
        # An empty child object merged into a populated parent object keeps
        # the parent's leaves.
        value = _lookup(merged, field)
        if isinstance(value, dict) and value:
            continue
        origins[field] = source

    return copy.deepcopy(merged), origins


def _lookup(tree: JSONObject, field: FieldPath) -> JSONValue:
    value: JSONValue = tree
    for key in field:
        if not isinstance(value, dict) or key not in value:
            return None
        value = value[key]
    return value
