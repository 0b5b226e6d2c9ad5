"""Tests for materializing merged tsconfig trees into typed models.

These tests verify that materialize() types the well-known fields, keeps
unknown keys in the residual mapping and reports shape mismatches as
FieldTypeError with the offending field path.
"""

from pathlib import Path

import pytest

from tsconfig_resolver.errors import FieldTypeError
from tsconfig_resolver.models.tsconfig import (
    CompilerOptions,
    Jsx,
    Module,
    ModuleResolution,
    Target,
    TsConfig,
    materialize,
)


def test_materialize_well_known_fields():
    tree = {
        "compilerOptions": {
            "target": "es2020",
            "module": "commonjs",
            "strict": True,
            "baseUrl": ".",
            "outDir": "dist",
            "paths": {"@app/*": ["src/*"]},
            "lib": ["dom", "es2020"],
        },
        "include": ["src"],
        "exclude": ["node_modules"],
        "files": ["src/index.ts"],
        "references": [{"path": "../core", "prepend": False}],
    }

    config = materialize(tree)

    assert isinstance(config, TsConfig)
    options = config.compiler_options
    assert isinstance(options, CompilerOptions)
    assert options.target is Target.ES2020
    assert options.module is Module.COMMONJS
    assert options.strict is True
    assert options.base_url == "."
    assert options.out_dir == "dist"
    assert options.paths == {"@app/*": ["src/*"]}
    assert options.lib == ["dom", "es2020"]
    assert config.include == ["src"]
    assert config.exclude == ["node_modules"]
    assert config.files == ["src/index.ts"]
    assert config.references[0].path == "../core"
    assert config.references[0].prepend is False
    assert config.residual == {}


def test_enum_options_are_case_insensitive():
    config = materialize(
        {
            "compilerOptions": {
                "target": "ESNext",
                "module": "NodeNext",
                "moduleResolution": "Bundler",
                "jsx": "react-jsx",
            }
        }
    )
    options = config.compiler_options
    assert options.target is Target.ESNEXT
    assert options.module is Module.NODENEXT
    assert options.module_resolution is ModuleResolution.BUNDLER
    assert options.jsx is Jsx.REACT_JSX


def test_es7_target_is_accepted():
    config = materialize({"compilerOptions": {"target": "ES7"}})
    assert config.compiler_options.target is Target.ES7


def test_boolean_references_is_a_field_type_error():
    with pytest.raises(FieldTypeError) as exc_info:
        materialize({"references": True})

    assert exc_info.value.field_path == "references"
    assert exc_info.value.expected == "an array"
    assert exc_info.value.found == "boolean"


def test_field_type_error_path_comes_from_origins():
    base = Path("/repo/base.json")
    root = Path("/repo/tsconfig.json")
    origins = {("compilerOptions", "strict"): base, ("include",): root}

    with pytest.raises(FieldTypeError) as exc_info:
        materialize({"compilerOptions": {"strict": 1}}, source_path=root, origins=origins)
    assert exc_info.value.path == base

    with pytest.raises(FieldTypeError) as exc_info:
        materialize({"files": [1]}, source_path=root, origins=origins)
    assert exc_info.value.path == root


def test_string_for_boolean_is_a_field_type_error():
    with pytest.raises(FieldTypeError) as exc_info:
        materialize({"compilerOptions": {"strict": "true"}})

    err = exc_info.value
    assert err.field_path == "compilerOptions.strict"
    assert err.expected == "a boolean"
    assert err.found == "string"


def test_unknown_enum_value_is_a_field_type_error():
    with pytest.raises(FieldTypeError) as exc_info:
        materialize({"compilerOptions": {"target": "es1999"}})

    err = exc_info.value
    assert err.field_path == "compilerOptions.target"
    assert err.expected.startswith("one of")
    assert "'es5'" in err.expected
    assert err.found == "'es1999'"
    assert "got 'es1999'" in str(err)


def test_list_item_error_includes_index():
    with pytest.raises(FieldTypeError) as exc_info:
        materialize({"include": ["src", 3]})

    assert exc_info.value.field_path == "include[1]"
    assert exc_info.value.found == "number"


def test_object_expected_for_compiler_options():
    with pytest.raises(FieldTypeError) as exc_info:
        materialize({"compilerOptions": ["strict"]})

    assert exc_info.value.field_path == "compilerOptions"
    assert exc_info.value.expected == "an object"
    assert exc_info.value.found == "array"


def test_reference_without_path_is_reported_missing():
    with pytest.raises(FieldTypeError) as exc_info:
        materialize({"references": [{"prepend": True}]})

    assert exc_info.value.field_path == "references[0].path"
    assert exc_info.value.found == "missing"


def test_root_must_be_an_object():
    with pytest.raises(FieldTypeError) as exc_info:
        materialize(["not", "an", "object"])

    assert exc_info.value.field_path == "$"
    assert exc_info.value.found == "array"


def test_unknown_top_level_field_kept_in_residual():
    config = materialize({"foo": {"bar": 1}, "$schema": "https://json.schemastore.org/tsconfig"})

    assert config.residual == {
        "foo": {"bar": 1},
        "$schema": "https://json.schemastore.org/tsconfig",
    }


def test_unknown_nested_fields_kept_in_residual():
    config = materialize(
        {
            "compilerOptions": {"strict": True, "erasableSyntaxOnly": True},
            "references": [{"path": "../core", "circular": True}],
        }
    )

    assert config.compiler_options.residual == {"erasableSyntaxOnly": True}
    assert config.references[0].residual == {"circular": True}


def test_snake_case_keys_are_not_mistaken_for_options():
    config = materialize({"compilerOptions": {"allow_js": True}})

    assert config.compiler_options.allow_js is None
    assert config.compiler_options.residual == {"allow_js": True}


def test_extends_is_dropped():
    config = materialize({"extends": "./base.json", "include": ["src"]})
    assert config.residual == {}
    assert config.include == ["src"]


def test_type_acquisition_flag_expands():
    config = materialize({"typeAcquisition": True})
    assert config.type_acquisition.enable is True

    config = materialize({"typeAcquisition": {"enable": False, "include": ["jquery"]}})
    assert config.type_acquisition.enable is False
    assert config.type_acquisition.include == ["jquery"]


def test_explicit_null_is_kept_as_set_field():
    config = materialize({"compilerOptions": {"outDir": None}})

    assert config.compiler_options.out_dir is None
    assert "out_dir" in config.compiler_options.model_fields_set


def test_to_json_dict_uses_tsconfig_keys():
    tree = {
        "compilerOptions": {"target": "ES5", "strict": True, "outDir": "dist"},
        "include": ["src"],
    }
    config = materialize(tree)

    assert config.to_json_dict() == {
        "compilerOptions": {"target": "es5", "strict": True, "outDir": "dist"},
        "include": ["src"],
    }
