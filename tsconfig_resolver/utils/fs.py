"""Filesystem access used by the resolver.

The resolver only needs a handful of read-only queries, collected in the
FileSystem protocol so callers can substitute their own implementation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from tsconfig_resolver.errors import TsConfigIOError


class FileSystem(Protocol):
    def read_to_string(self, path: Path) -> str: ...

    def exists(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def is_directory(self, path: Path) -> bool: ...

    def canonicalize(self, path: Path) -> Path: ...


class LocalFileSystem:
    """FileSystem backed by pathlib on the local disk."""

    encoding = "utf-8"

    def read_to_string(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise TsConfigIOError(path, str(exc)) from exc

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_file(self, path: Path) -> bool:
        return path.exists() and path.is_file()

    def is_directory(self, path: Path) -> bool:
        return path.is_dir()

    def canonicalize(self, path: Path) -> Path:
        """Absolute path with symlinks resolved and ``..`` collapsed."""
        return path.resolve()
