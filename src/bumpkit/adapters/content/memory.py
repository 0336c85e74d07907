"""In-memory content source for tests and embedding callers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(slots=True)
class InMemoryContentSource:
    """Serve file contents from plain mappings.

    ``branches`` holds per-branch overrides; paths missing there fall back to
    ``files``. A ``None`` value marks a file as deleted on that branch.
    """

    files: Mapping[str, str] = field(default_factory=dict["str", "str"])
    branches: Mapping[str, Mapping[str, str | None]] = field(
        default_factory=dict["str", "Mapping[str, str | None]"]
    )

    def get_file(self, path: str, *, branch: str | None = None) -> str | None:
        if branch is not None:
            overrides = self.branches.get(branch, {})
            if path in overrides:
                return overrides[path]
        return self.files.get(path)
