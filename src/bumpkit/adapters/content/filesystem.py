"""Content source reading from a local working tree."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path

log = getLogger(__name__)


class UnsafePathError(ValueError):
    """Raised when a requested path resolves outside the checkout root."""


@dataclass(slots=True)
class LocalCheckoutContentSource:
    """Read repository files from a checkout directory.

    ``worktrees`` maps branch names to separate working tree directories;
    branches without an entry read from ``root``.
    """

    root: Path
    worktrees: Mapping[str, Path] = field(default_factory=dict["str", "Path"])
    encoding: str = "utf-8"

    def get_file(self, path: str, *, branch: str | None = None) -> str | None:
        target = resolve_within(self._root_for(branch), path)
        if not target.is_file():
            log.debug("%s not found in %s", path, target.parent)
            return None
        return target.read_text(encoding=self.encoding)

    def _root_for(self, branch: str | None) -> Path:
        if branch is not None and branch in self.worktrees:
            return self.worktrees[branch]
        return self.root


def resolve_within(root: Path, path: str) -> Path:
    """Resolve ``path`` relative to ``root``, refusing anything that escapes it."""

    base = root.expanduser().resolve()
    target = (base / path.lstrip("/")).resolve()
    if not target.is_relative_to(base):
        raise UnsafePathError(f"Path escapes checkout root: {path}")
    return target
