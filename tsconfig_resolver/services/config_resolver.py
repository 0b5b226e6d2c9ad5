"""Resolve a tsconfig/jsconfig file and everything it extends.

The extends graph is walked depth-first with an explicit stack: each config is
entered (pushed on the ExtendsChain), its bases are resolved left to right and
folded together, then the config's own fields are merged over the folded base
and the result is handed to the config that extended it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from tsconfig_resolver.errors import ExtendsDepthError, FieldTypeError, TsConfigIOError
from tsconfig_resolver.models.json_value import JSONObject, Origins, json_kind
from tsconfig_resolver.models.tsconfig import TsConfig, materialize
from tsconfig_resolver.utils.extends_chain import ExtendsChain
from tsconfig_resolver.utils.extends_path import resolve_extends_path
from tsconfig_resolver.utils.fs import FileSystem, LocalFileSystem
from tsconfig_resolver.utils.jsonc import parse_jsonc
from tsconfig_resolver.utils.merge import (
    EXTENDS_KEY,
    collect_origins,
    merge_with_origins,
    strip_extends,
)

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = ("tsconfig.json", "jsconfig.json")

# Placeholder file name for configs parsed from a string.
INLINE_CONFIG_NAME = "<string>"


@dataclass(frozen=True)
class EffectiveConfig:
    """Merged config tree plus where it came from."""

    path: Path
    tree: JSONObject
    origins: Origins
    extended_files: tuple[Path, ...]

    def materialize(self) -> TsConfig:
        return materialize(
            self.tree,
            source_path=self.path,
            origins=self.origins,
            extended_files=self.extended_files,
        )


@dataclass
class _Frame:
    path: Path
    own: JSONObject
    specifiers: list[str]
    next_index: int = 0
    base: JSONObject = field(default_factory=dict)
    base_origins: Origins = field(default_factory=dict)


def find_tsconfig(repo_root: Path, fs: FileSystem | None = None) -> Path | None:
    """Return tsconfig.json or jsconfig.json under repo_root, preferring tsconfig."""
    fs = fs or LocalFileSystem()
    for name in CONFIG_FILE_NAMES:
        candidate = repo_root / name
        if fs.is_file(candidate):
            return candidate
    return None


def _extends_specifiers(tree: JSONObject, path: Path, *, allow_extends_array: bool) -> list[str]:
    value = tree.get(EXTENDS_KEY)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]

    if isinstance(value, list):
        if not allow_extends_array:
            raise FieldTypeError(EXTENDS_KEY, "a string", "array", path=path)
        for i, item in enumerate(value):
            if not isinstance(item, str):
                raise FieldTypeError(
                    f"{EXTENDS_KEY}[{i}]", "a string", json_kind(item), path=path
                )
        return list(value)

    raise FieldTypeError(
        EXTENDS_KEY, "a string or an array of strings", json_kind(value), path=path
    )


def _load_tree(path: Path, fs: FileSystem, cache: dict[Path, JSONObject]) -> JSONObject:
    cached = cache.get(path)
    if cached is not None:
        return cached

    logger.debug("Loading tsconfig %s", path)
    data = parse_jsonc(fs.read_to_string(path), path=path)
    if not isinstance(data, dict):
        raise FieldTypeError("$", "an object", json_kind(data), path=path)

    cache[path] = data
    return data


def _resolve_tree(
    root_path: Path,
    root_tree: JSONObject,
    fs: FileSystem,
    *,
    allow_extends_array: bool,
    max_depth: int | None,
) -> EffectiveConfig:
    cache: dict[Path, JSONObject] = {root_path: root_tree}
    chain = ExtendsChain()
    loaded: dict[Path, None] = {}

    def new_frame(path: Path, tree: JSONObject) -> _Frame:
        specifiers = _extends_specifiers(tree, path, allow_extends_array=allow_extends_array)
        return _Frame(path=path, own=tree, specifiers=specifiers)

    chain.push(root_path)
    stack = [new_frame(root_path, root_tree)]

    while True:
        frame = stack[-1]

        if frame.next_index < len(frame.specifiers):
            specifier = frame.specifiers[frame.next_index]
            frame.next_index += 1

            target = resolve_extends_path(frame.path.parent, specifier, fs)
            chain.push(target)
            if max_depth is not None and len(chain) - 1 > max_depth:
                raise ExtendsDepthError(max_depth, target)

            stack.append(new_frame(target, _load_tree(target, fs, cache)))
            continue

        stack.pop()
        chain.pop()

        own_origins = collect_origins(strip_extends(frame.own), frame.path)
        merged, origins = merge_with_origins(
            frame.base, frame.own, frame.base_origins, own_origins
        )
        loaded[frame.path] = None

        if not stack:
            return EffectiveConfig(
                path=frame.path,
                tree=merged,
                origins=origins,
                extended_files=tuple(loaded),
            )

        parent = stack[-1]
        logger.debug("Folding %s into %s", frame.path, parent.path)
        parent.base, parent.base_origins = merge_with_origins(
            parent.base, merged, parent.base_origins, origins
        )


def resolve_config_tree(
    path: str | PathLike[str],
    *,
    fs: FileSystem | None = None,
    allow_extends_array: bool = True,
    max_depth: int | None = None,
) -> EffectiveConfig:
    """Load a config file and fold in everything it extends.

    Args:
        path: Config file, or a directory holding tsconfig.json/jsconfig.json.
        fs: Filesystem to read from (defaults to the local disk).
        allow_extends_array: Accept ``"extends": [...]`` with several bases.
        max_depth: Optional limit on extends chain length (root is depth 0).

    Returns:
        EffectiveConfig with the merged tree, per-field origins and the list
        of files that took part.

    Raises:
        TsConfigIOError: A config file could not be read.
        TsConfigParseError: A config file is not valid JSONC.
        ExtendsNotFoundError: An extends target could not be located.
        CircularExtendsError: The extends chain loops back on itself.
        ExtendsDepthError: The chain is longer than max_depth.
        FieldTypeError: ``extends`` or the root value has the wrong shape.
    """
    if max_depth is not None and max_depth < 0:
        raise ValueError("max_depth must be non-negative")

    fs = fs or LocalFileSystem()
    config_path = Path(path)

    if fs.is_directory(config_path):
        found = find_tsconfig(config_path, fs)
        if found is None:
            raise TsConfigIOError(config_path, "no tsconfig.json or jsconfig.json")
        config_path = found

    root_path = fs.canonicalize(config_path)
    root_tree = _load_tree(root_path, fs, {})
    return _resolve_tree(
        root_path,
        root_tree,
        fs,
        allow_extends_array=allow_extends_array,
        max_depth=max_depth,
    )


def parse_file(
    path: str | PathLike[str],
    *,
    fs: FileSystem | None = None,
    allow_extends_array: bool = True,
    max_depth: int | None = None,
) -> TsConfig:
    """Resolve and materialize a tsconfig.json/jsconfig.json file."""
    effective = resolve_config_tree(
        path, fs=fs, allow_extends_array=allow_extends_array, max_depth=max_depth
    )
    return effective.materialize()


def parse_str(
    text: str,
    *,
    base_dir: str | PathLike[str] | None = None,
    fs: FileSystem | None = None,
    allow_extends_array: bool = True,
    max_depth: int | None = None,
) -> TsConfig:
    """Resolve and materialize config text that does not live on disk.

    Relative extends targets are resolved against base_dir (the current
    working directory when omitted).
    """
    if max_depth is not None and max_depth < 0:
        raise ValueError("max_depth must be non-negative")

    fs = fs or LocalFileSystem()
    directory = fs.canonicalize(Path(base_dir) if base_dir is not None else Path.cwd())
    root_path = directory / INLINE_CONFIG_NAME

    data = parse_jsonc(text)
    if not isinstance(data, dict):
        raise FieldTypeError("$", "an object", json_kind(data))

    effective = _resolve_tree(
        root_path,
        data,
        fs,
        allow_extends_array=allow_extends_array,
        max_depth=max_depth,
    )
    return effective.materialize()
