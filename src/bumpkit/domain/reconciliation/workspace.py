"""Per-pass view of file contents on the branch being reconciled."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from bumpkit.domain.model import FileChange

from .contracts import settle

if TYPE_CHECKING:
    from bumpkit.domain.ports.content import FileContentSource

log = getLogger(__name__)


@dataclass(slots=True)
class BranchWorkspace:
    """Original and updated contents of every file touched in one pass.

    Each path is fetched from ``source`` at most once. Writes equal to the
    original content are dropped, so ``updated_files`` never reports a file
    that did not change.
    """

    source: FileContentSource
    ref: str | None
    _originals: dict[str, str | None] = field(
        default_factory=dict["str", "str | None"], repr=False
    )
    _updated: dict[str, str] = field(default_factory=dict["str", "str"], repr=False)

    async def original(self, path: str | None) -> str | None:
        if path is None:
            return None
        if path not in self._originals:
            self._originals[path] = await settle(self.source.get_file(path, branch=self.ref))
        return self._originals[path]

    async def current(self, path: str | None) -> str | None:
        if path is None:
            return None
        if path in self._updated:
            return self._updated[path]
        return await self.original(path)

    async def write(self, path: str, content: str) -> bool:
        """Record ``content`` for ``path``; return whether it differs from the original."""

        if content == await self.original(path):
            if self._updated.pop(path, None) is not None:
                log.debug("Content of %s reverted to original", path)
            else:
                log.debug("No content changed for %s", path)
            return False
        self._updated[path] = content
        return True

    def is_updated(self, path: str | None) -> bool:
        return path is not None and path in self._updated

    def updated_files(self) -> list[FileChange]:
        return [FileChange(path=path, contents=content) for path, content in self._updated.items()]
