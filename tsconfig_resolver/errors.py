"""Error types raised while loading and resolving tsconfig/jsconfig files.

All errors derive from TsConfigError, which is a ValueError so callers that
guard config loading with ``except ValueError`` keep working.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class TsConfigError(ValueError):
    """Base class for every tsconfig resolution failure."""


class TsConfigIOError(TsConfigError):
    """A config file (requested or extends target) could not be read."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        message = f"Failed to read tsconfig: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class TsConfigParseError(TsConfigError):
    """Malformed JSON/JSONC text."""

    def __init__(
        self,
        detail: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.detail = detail
        self.path = path
        self.line = line
        self.column = column

        where = str(path) if path is not None else "<string>"
        if line is not None:
            where = f"{where}:{line}:{column}"
        super().__init__(f"Invalid JSON in tsconfig {where}: {detail}")


class ExtendsNotFoundError(TsConfigError):
    """No lookup rule could locate an ``extends`` target."""

    def __init__(self, specifier: str, base_dir: Path) -> None:
        self.specifier = specifier
        self.base_dir = base_dir
        super().__init__(f"extends target not found: {specifier} (from {base_dir})")


class CircularExtendsError(TsConfigError):
    """The extends graph revisits a file already on the active chain."""

    def __init__(self, chain: Sequence[Path]) -> None:
        self.chain = tuple(chain)
        rendered = " -> ".join(str(p) for p in self.chain)
        super().__init__(f"Circular extends detected: {rendered}")


class ExtendsDepthError(TsConfigError):
    """The extends chain is longer than the configured max_depth."""

    def __init__(self, max_depth: int, path: Path) -> None:
        self.max_depth = max_depth
        self.path = path
        super().__init__(f"tsconfig extends exceeds max_depth ({max_depth}) at {path}")


class FieldTypeError(TsConfigError):
    """A recognized field holds a value of the wrong shape."""

    def __init__(
        self,
        field_path: str,
        expected: str,
        found: str,
        *,
        path: Path | None = None,
    ) -> None:
        self.field_path = field_path
        self.expected = expected
        self.found = found
        self.path = path

        message = f"'{field_path}' must be {expected}, got {found}"
        if path is not None:
            message = f"{message} (in {path})"
        super().__init__(message)
