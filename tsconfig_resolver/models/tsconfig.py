"""Typed tsconfig/jsconfig models.

Current implementation: TsConfig exposes compilerOptions, files, include,
exclude, references, typeAcquisition, watchOptions and compileOnSave as typed
fields. Any key the models do not know about (at any nesting level) is kept
verbatim in ``model_extra`` and exposed as ``residual``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Iterable

from pydantic import (
    BaseModel,
    ConfigDict,
    PrivateAttr,
    StrictBool,
    StrictStr,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from tsconfig_resolver.errors import FieldTypeError
from tsconfig_resolver.models.json_value import JSONObject, JSONValue, Origins, json_kind
from tsconfig_resolver.utils.merge import strip_extends


class _CaseInsensitiveEnum(str, Enum):
    """String enum matched case-insensitively, like tsc does for option values."""

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class Target(_CaseInsensitiveEnum):
    ES3 = "es3"
    ES5 = "es5"
    ES6 = "es6"
    ES7 = "es7"
    ES2015 = "es2015"
    ES2016 = "es2016"
    ES2017 = "es2017"
    ES2018 = "es2018"
    ES2019 = "es2019"
    ES2020 = "es2020"
    ES2021 = "es2021"
    ES2022 = "es2022"
    ES2023 = "es2023"
    ES2024 = "es2024"
    ESNEXT = "esnext"


class Module(_CaseInsensitiveEnum):
    NONE = "none"
    COMMONJS = "commonjs"
    AMD = "amd"
    UMD = "umd"
    SYSTEM = "system"
    ES6 = "es6"
    ES2015 = "es2015"
    ES2020 = "es2020"
    ES2022 = "es2022"
    ESNEXT = "esnext"
    NODE16 = "node16"
    NODE18 = "node18"
    NODENEXT = "nodenext"
    PRESERVE = "preserve"


class ModuleResolution(_CaseInsensitiveEnum):
    CLASSIC = "classic"
    NODE = "node"
    NODE10 = "node10"
    NODE16 = "node16"
    NODENEXT = "nodenext"
    BUNDLER = "bundler"


class Jsx(_CaseInsensitiveEnum):
    PRESERVE = "preserve"
    REACT = "react"
    REACT_JSX = "react-jsx"
    REACT_JSXDEV = "react-jsxdev"
    REACT_NATIVE = "react-native"


class NewLine(_CaseInsensitiveEnum):
    CRLF = "crlf"
    LF = "lf"


class ModuleDetection(_CaseInsensitiveEnum):
    AUTO = "auto"
    LEGACY = "legacy"
    FORCE = "force"


def _coerce_enum(enum_cls: type[_CaseInsensitiveEnum], value: Any) -> Any:
    if value is None or isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            pass
    choices = ", ".join(repr(member.value) for member in enum_cls)
    raise PydanticCustomError(
        "enum_value",
        "Input should be {expected}",
        {"expected": f"one of {choices}"},
    )


class _ConfigModel(BaseModel):
    # Scalars use StrictBool/StrictStr: "true" is not a boolean.
    model_config = ConfigDict(alias_generator=to_camel, extra="allow")

    @property
    def residual(self) -> dict[str, Any]:
        """Keys present in the source that this model does not recognize."""
        return dict(self.model_extra or {})


class ProjectReference(_ConfigModel):
    path: StrictStr
    prepend: StrictBool | None = None


class TypeAcquisition(_ConfigModel):
    enable: StrictBool | None = None
    include: list[StrictStr] | None = None
    exclude: list[StrictStr] | None = None
    disable_filename_based_type_acquisition: StrictBool | None = None


class WatchOptions(_ConfigModel):
    watch_file: StrictStr | None = None
    watch_directory: StrictStr | None = None
    fallback_polling: StrictStr | None = None
    synchronous_watch_directory: StrictBool | None = None
    exclude_directories: list[StrictStr] | None = None
    exclude_files: list[StrictStr] | None = None


class CompilerOptions(_ConfigModel):
    """Options that drive how the compiler checks and emits a project."""

    # Language and environment
    target: Target | None = None
    lib: list[StrictStr] | None = None
    jsx: Jsx | None = None
    jsx_factory: StrictStr | None = None
    jsx_fragment_factory: StrictStr | None = None
    jsx_import_source: StrictStr | None = None
    experimental_decorators: StrictBool | None = None
    emit_decorator_metadata: StrictBool | None = None
    use_define_for_class_fields: StrictBool | None = None
    module_detection: ModuleDetection | None = None

    # Modules
    module: Module | None = None
    module_resolution: ModuleResolution | None = None
    base_url: StrictStr | None = None
    paths: dict[str, list[StrictStr]] | None = None
    root_dir: StrictStr | None = None
    root_dirs: list[StrictStr] | None = None
    type_roots: list[StrictStr] | None = None
    types: list[StrictStr] | None = None
    resolve_json_module: StrictBool | None = None
    allow_importing_ts_extensions: StrictBool | None = None
    allow_js: StrictBool | None = None
    check_js: StrictBool | None = None

    # Emit
    declaration: StrictBool | None = None
    declaration_map: StrictBool | None = None
    declaration_dir: StrictStr | None = None
    emit_declaration_only: StrictBool | None = None
    source_map: StrictBool | None = None
    inline_source_map: StrictBool | None = None
    inline_sources: StrictBool | None = None
    source_root: StrictStr | None = None
    map_root: StrictStr | None = None
    out_dir: StrictStr | None = None
    out_file: StrictStr | None = None
    remove_comments: StrictBool | None = None
    no_emit: StrictBool | None = None
    no_emit_on_error: StrictBool | None = None
    import_helpers: StrictBool | None = None
    downlevel_iteration: StrictBool | None = None
    preserve_const_enums: StrictBool | None = None
    new_line: NewLine | None = None

    # Interop
    isolated_modules: StrictBool | None = None
    verbatim_module_syntax: StrictBool | None = None
    es_module_interop: StrictBool | None = None
    allow_synthetic_default_imports: StrictBool | None = None
    force_consistent_casing_in_file_names: StrictBool | None = None

    # Type checking
    strict: StrictBool | None = None
    always_strict: StrictBool | None = None
    no_implicit_any: StrictBool | None = None
    no_implicit_this: StrictBool | None = None
    strict_bind_call_apply: StrictBool | None = None
    strict_function_types: StrictBool | None = None
    strict_null_checks: StrictBool | None = None
    strict_property_initialization: StrictBool | None = None
    use_unknown_in_catch_variables: StrictBool | None = None
    exact_optional_property_types: StrictBool | None = None
    no_unchecked_indexed_access: StrictBool | None = None
    no_unused_locals: StrictBool | None = None
    no_unused_parameters: StrictBool | None = None
    no_implicit_returns: StrictBool | None = None
    no_fallthrough_cases_in_switch: StrictBool | None = None
    skip_lib_check: StrictBool | None = None

    # Projects
    composite: StrictBool | None = None
    incremental: StrictBool | None = None
    ts_build_info_file: StrictStr | None = None

    plugins: list[Any] | None = None

    @field_validator(
        "target", "module", "module_resolution", "jsx", "new_line", "module_detection",
        mode="before",
    )
    @classmethod
    def _match_enum_value(cls, value: Any, info) -> Any:
        enum_cls = _ENUM_FIELDS[info.field_name]
        return _coerce_enum(enum_cls, value)


_ENUM_FIELDS: dict[str, type[_CaseInsensitiveEnum]] = {
    "target": Target,
    "module": Module,
    "module_resolution": ModuleResolution,
    "jsx": Jsx,
    "new_line": NewLine,
    "module_detection": ModuleDetection,
}


class TsConfig(_ConfigModel):
    """Fully resolved tsconfig.json / jsconfig.json."""

    compiler_options: CompilerOptions | None = None
    files: list[StrictStr] | None = None
    include: list[StrictStr] | None = None
    exclude: list[StrictStr] | None = None
    references: list[ProjectReference] | None = None
    type_acquisition: TypeAcquisition | None = None
    watch_options: WatchOptions | None = None
    compile_on_save: StrictBool | None = None

    _source_path: Path | None = PrivateAttr(default=None)
    _origins: Origins = PrivateAttr(default_factory=dict)
    _extended_files: tuple[Path, ...] = PrivateAttr(default=())

    @field_validator("type_acquisition", mode="before")
    @classmethod
    def _expand_type_acquisition_flag(cls, value: Any) -> Any:
        # "typeAcquisition": true is shorthand for {"enable": true}
        if isinstance(value, bool):
            return {"enable": value}
        return value

    @property
    def source_path(self) -> Path | None:
        """The file originally requested."""
        return self._source_path

    @property
    def origins(self) -> Origins:
        """Field path -> config file that supplied the value."""
        return dict(self._origins)

    @property
    def extended_files(self) -> tuple[Path, ...]:
        """Every config file folded into this one, bases first."""
        return self._extended_files

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize back to tsconfig JSON shape (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


_EXPECTED_KINDS = {
    "bool_type": "a boolean",
    "string_type": "a string",
    "int_type": "an integer",
    "float_type": "a number",
    "list_type": "an array",
    "dict_type": "an object",
    "model_type": "an object",
    "model_attributes_type": "an object",
    "missing": "present",
}


def _format_loc(loc: Iterable[Any]) -> str:
    rendered = ""
    for part in loc:
        if isinstance(part, int):
            rendered += f"[{part}]"
        elif rendered:
            rendered += f".{part}"
        else:
            rendered = str(part)
    return rendered or "$"


def _declaring_file(loc: Iterable[Any], origins: Origins, default: Path | None) -> Path | None:
    """File that supplied the value at loc, falling back to default."""
    field = tuple(part for part in loc if isinstance(part, str))
    while field:
        if field in origins:
            return origins[field]
        field = field[:-1]
    return default


def _to_field_type_error(
    exc: ValidationError, path: Path | None, origins: Origins
) -> FieldTypeError:
    error = exc.errors()[0]
    error_type = error["type"]
    ctx = error.get("ctx") or {}

    expected = _EXPECTED_KINDS.get(error_type) or ctx.get("expected") or error["msg"]
    if error_type == "missing":
        found = "missing"
    elif error_type == "enum_value":
        found = repr(error.get("input"))
    else:
        found = json_kind(error.get("input"))
    return FieldTypeError(
        _format_loc(error["loc"]),
        expected,
        found,
        path=_declaring_file(error["loc"], origins, path),
    )


def materialize(
    tree: JSONValue,
    *,
    source_path: Path | None = None,
    origins: Origins | None = None,
    extended_files: Iterable[Path] = (),
) -> TsConfig:
    """Project a merged config tree onto TsConfig.

    Args:
        tree: Merged JSON tree; its ``extends`` key (if any) is dropped.
        source_path: File the resolution started from.
        origins: Leaf attribution produced while merging.
        extended_files: Config files folded into the result.

    Returns:
        The typed config, with unrecognized keys kept in ``residual``.

    Raises:
        FieldTypeError: If a recognized field has the wrong shape.
    """
    if not isinstance(tree, dict):
        raise FieldTypeError("$", "an object", json_kind(tree), path=source_path)

    data: JSONObject = strip_extends(tree)
    try:
        config = TsConfig.model_validate(data)
    except ValidationError as exc:
        raise _to_field_type_error(exc, source_path, origins or {}) from exc

    config._source_path = source_path
    config._origins = dict(origins or {})
    config._extended_files = tuple(extended_files)
    return config
