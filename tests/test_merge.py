"""Tests for merging a parent tsconfig tree into a child tree."""

import copy
from pathlib import Path

from tsconfig_resolver.utils.merge import (
    collect_origins,
    merge_config_trees,
    merge_with_origins,
)

PARENT = Path("/repo/base.json")
CHILD = Path("/repo/tsconfig.json")


def test_child_overrides_single_nested_option():
    parent = {"compilerOptions": {"strict": False, "target": "es5"}}
    child = {"extends": "./base.json", "compilerOptions": {"strict": True}}

    merged = merge_config_trees(parent, child)
    assert merged == {"compilerOptions": {"strict": True, "target": "es5"}}


def test_extends_is_not_carried_into_result():
    merged = merge_config_trees({"files": ["a.ts"]}, {"extends": "./base.json"})
    assert "extends" not in merged
    assert merged == {"files": ["a.ts"]}


def test_arrays_are_replaced_not_concatenated():
    parent = {"include": ["lib"], "compilerOptions": {"lib": ["dom", "es2015"]}}
    child = {"include": ["src"], "compilerOptions": {"lib": ["es2020"]}}

    merged = merge_config_trees(parent, child)
    assert merged["include"] == ["src"]
    assert merged["compilerOptions"]["lib"] == ["es2020"]


def test_missing_child_keys_are_inherited():
    parent = {"exclude": ["dist"], "files": ["index.ts"]}
    merged = merge_config_trees(parent, {"include": ["src"]})
    assert merged == {"exclude": ["dist"], "files": ["index.ts"], "include": ["src"]}


def test_null_in_child_clears_parent_value():
    parent = {"compilerOptions": {"outDir": "dist", "strict": True}}
    child = {"compilerOptions": {"outDir": None}}

    merged = merge_config_trees(parent, child)
    assert merged["compilerOptions"] == {"outDir": None, "strict": True}


def test_type_mismatch_resolves_to_child():
    merged = merge_config_trees({"watchOptions": {"watchFile": "fixedpollinginterval"}}, {"watchOptions": False})
    assert merged == {"watchOptions": False}

    merged = merge_config_trees({"custom": 1}, {"custom": {"nested": True}})
    assert merged == {"custom": {"nested": True}}


def test_nested_objects_merge_recursively():
    parent = {
        "compilerOptions": {
            "baseUrl": "base",
            "paths": {"@app/*": ["base/*"], "@lib/*": ["lib/*"]},
        }
    }
    child = {
        "compilerOptions": {
            "baseUrl": ".",
            "paths": {"@app/*": ["src/*"], "@app/test/*": ["test/*"]},
        }
    }

    merged = merge_config_trees(parent, child)
    assert merged["compilerOptions"]["baseUrl"] == "."
    assert merged["compilerOptions"]["paths"] == {
        "@app/*": ["src/*"],
        "@lib/*": ["lib/*"],
        "@app/test/*": ["test/*"],
    }


def test_inputs_are_not_mutated_or_aliased():
    parent = {"compilerOptions": {"types": ["node"]}, "references": [{"path": "../core"}]}
    child = {"compilerOptions": {"strict": True}}
    parent_before = copy.deepcopy(parent)
    child_before = copy.deepcopy(child)

    merged = merge_config_trees(parent, child)
    merged["compilerOptions"]["types"].append("jest")
    merged["references"][0]["path"] = "changed"

    assert parent == parent_before
    assert child == child_before


def test_unknown_keys_survive_merge():
    parent = {"foo": {"bar": 1}}
    child = {"compilerOptions": {"someFutureFlag": "x"}}

    merged = merge_config_trees(parent, child)
    assert merged["foo"] == {"bar": 1}
    assert merged["compilerOptions"] == {"someFutureFlag": "x"}


def test_collect_origins_attributes_leaves():
    tree = {"compilerOptions": {"strict": True, "paths": {}}, "include": ["src"]}
    assert collect_origins(tree, CHILD) == {
        ("compilerOptions", "strict"): CHILD,
        ("compilerOptions", "paths"): CHILD,
        ("include",): CHILD,
    }


def test_merge_with_origins_tracks_each_leaf():
    parent = {"compilerOptions": {"strict": False, "target": "es5"}, "include": ["lib"]}
    child = {"compilerOptions": {"strict": True}}

    merged, origins = merge_with_origins(
        parent,
        child,
        collect_origins(parent, PARENT),
        collect_origins(child, CHILD),
    )

    assert merged["compilerOptions"] == {"strict": True, "target": "es5"}
    assert origins == {
        ("compilerOptions", "strict"): CHILD,
        ("compilerOptions", "target"): PARENT,
        ("include",): PARENT,
    }


def test_replaced_subtree_drops_parent_origins():
    parent = {"watchOptions": {"watchFile": "a", "watchDirectory": "b"}}
    child = {"watchOptions": None}

    merged, origins = merge_with_origins(
        parent,
        child,
        collect_origins(parent, PARENT),
        collect_origins(child, CHILD),
    )

    assert merged == {"watchOptions": None}
    assert origins == {("watchOptions",): CHILD}


def test_empty_child_object_keeps_parent_origins():
    parent = {"compilerOptions": {"strict": True}}
    child = {"compilerOptions": {}}

    merged, origins = merge_with_origins(
        parent,
        child,
        collect_origins(parent, PARENT),
        collect_origins(child, CHILD),
    )

    assert merged == {"compilerOptions": {"strict": True}}
    assert origins == {("compilerOptions", "strict"): PARENT}
