"""Active extends chain used to reject circular inheritance."""

from __future__ import annotations

from pathlib import Path

from tsconfig_resolver.errors import CircularExtendsError


class ExtendsChain:
    """Ordered set of canonical config paths currently being resolved.

    Each top-level resolution owns one chain. Paths are pushed when a config
    is entered and popped once it has been merged, so siblings extending the
    same base (a diamond) are not reported as cycles.
    """

    def __init__(self) -> None:
        self._paths: list[Path] = []
        self._members: set[Path] = set()

    def __contains__(self, path: object) -> bool:
        return path in self._members

    def __len__(self) -> int:
        return len(self._paths)

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(self._paths)

    def push(self, path: Path) -> None:
        """Enter a config.

        Raises:
            CircularExtendsError: If path is already on the chain. The error's
                chain runs from the first occurrence of path back to path.
        """
        if path in self._members:
            start = self._paths.index(path)
            raise CircularExtendsError([*self._paths[start:], path])
        self._paths.append(path)
        self._members.add(path)

    def pop(self) -> Path:
        path = self._paths.pop()
        self._members.discard(path)
        return path
