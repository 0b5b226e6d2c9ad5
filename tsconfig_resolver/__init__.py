"""Resolve tsconfig.json / jsconfig.json files, including ``extends`` chains."""

from tsconfig_resolver.errors import (
    CircularExtendsError,
    ExtendsDepthError,
    ExtendsNotFoundError,
    FieldTypeError,
    TsConfigError,
    TsConfigIOError,
    TsConfigParseError,
)
from tsconfig_resolver.models.tsconfig import CompilerOptions, ProjectReference, TsConfig
from tsconfig_resolver.services.config_resolver import (
    EffectiveConfig,
    find_tsconfig,
    parse_file,
    parse_str,
    resolve_config_tree,
)

__all__ = [
    "CircularExtendsError",
    "CompilerOptions",
    "EffectiveConfig",
    "ExtendsDepthError",
    "ExtendsNotFoundError",
    "FieldTypeError",
    "ProjectReference",
    "TsConfig",
    "TsConfigError",
    "TsConfigIOError",
    "TsConfigParseError",
    "find_tsconfig",
    "parse_file",
    "parse_str",
    "resolve_config_tree",
]
