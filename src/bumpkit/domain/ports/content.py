"""Port for reading file content from the repository backend."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileContentSource(Protocol):
    """Read-only access to repository files.

    ``branch`` selects the ref to read from; ``None`` means the source's
    default ref. Absent files are reported as ``None``. Implementations may be
    synchronous or return an awaitable.
    """

    def get_file(
        self, path: str, *, branch: str | None = None
    ) -> str | None | Awaitable[str | None]: ...


__all__ = ["FileContentSource"]
