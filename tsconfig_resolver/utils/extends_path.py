"""Locate the file named by a tsconfig ``extends`` specifier."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from tsconfig_resolver.errors import ExtendsNotFoundError
from tsconfig_resolver.utils.fs import FileSystem
from tsconfig_resolver.utils.jsonc import parse_jsonc

logger = logging.getLogger(__name__)

DEFAULT_TSCONFIG_NAME = "tsconfig.json"
PACKAGE_MANIFEST_NAME = "package.json"
PACKAGE_TSCONFIG_FIELD = "tsconfig"
NODE_MODULES_DIR = "node_modules"


def is_path_specifier(specifier: str) -> bool:
    """True for relative (``./``, ``../``) or absolute specifiers."""
    return (
        specifier.startswith(".")
        or specifier.startswith("/")
        or Path(specifier).is_absolute()
    )


def _probe_config_path(base: Path, fs: FileSystem) -> Path | None:
    """Try the path itself, then with .json appended."""
    if fs.is_file(base):
        return base

    if not base.name.endswith(".json"):
        with_json = base.with_name(base.name + ".json")
        if fs.is_file(with_json):
            return with_json
    return None


def _probe_directory_config(directory: Path, fs: FileSystem) -> Path | None:
    if not fs.is_directory(directory):
        return None

    candidate = directory / DEFAULT_TSCONFIG_NAME
    if fs.is_file(candidate):
        return candidate
    return None


def _package_declared_config(package_dir: Path, fs: FileSystem) -> Path | None:
    """Return the file named by package.json's "tsconfig" field, if any."""
    manifest = package_dir / PACKAGE_MANIFEST_NAME
    if not fs.is_file(manifest):
        return None

    data = parse_jsonc(fs.read_to_string(manifest), path=manifest)
    if not isinstance(data, dict):
        return None

    declared = data.get(PACKAGE_TSCONFIG_FIELD)
    if not isinstance(declared, str) or not declared:
        return None

    candidate = package_dir / declared
    try:
        fs.canonicalize(candidate).relative_to(fs.canonicalize(package_dir))
    except ValueError:
        logger.debug("Ignoring tsconfig field outside package %s: %s", package_dir, declared)
        return None

    return _probe_config_path(candidate, fs)


def _resolve_package_specifier(base_dir: Path, specifier: str, fs: FileSystem) -> Path | None:
    """Search node_modules/<specifier> in base_dir and each ancestor directory."""
    parts = PurePosixPath(specifier).parts

    for directory in (base_dir, *base_dir.parents):
        package_path = directory.joinpath(NODE_MODULES_DIR, *parts)

        found = _probe_config_path(package_path, fs)
        if found is not None:
            return found

        if fs.is_directory(package_path):
            found = _package_declared_config(package_path, fs)
            if found is None:
                found = _probe_directory_config(package_path, fs)
            if found is not None:
                return found

    return None


def resolve_extends_path(base_dir: Path, specifier: str, fs: FileSystem) -> Path:
    """Resolve an ``extends`` specifier to the canonical path of a config file.

    Path specifiers (starting with ``.`` or ``/``) are resolved against
    base_dir: the file itself, then ``<path>.json``, then
    ``<path>/tsconfig.json``. Anything else is treated as a package name and
    looked up in ``node_modules`` directories from base_dir upwards, honouring
    a package.json ``"tsconfig"`` field before falling back to the package's
    ``tsconfig.json``.

    Args:
        base_dir: Directory of the config that declares ``extends``.
        specifier: The ``extends`` string.
        fs: Filesystem used for existence checks.

    Returns:
        Canonical path of the target config file.

    Raises:
        ExtendsNotFoundError: If no rule locates an existing file.
    """
    found: Path | None = None

    if specifier and is_path_specifier(specifier):
        target = base_dir / specifier
        found = _probe_config_path(target, fs)
        if found is None:
            found = _probe_directory_config(target, fs)
    elif specifier:
        found = _resolve_package_specifier(base_dir, specifier, fs)

    if found is None:
        raise ExtendsNotFoundError(specifier, base_dir)

    canonical = fs.canonicalize(found)
    logger.debug("Resolved extends %r from %s to %s", specifier, base_dir, canonical)
    return canonical
