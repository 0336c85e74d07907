"""Shared reconciliation contract components.

This module intentionally holds only:
- the group key and edit-strategy enum shared by all stages
- the helper that settles sync-or-async collaborator results
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from bumpkit.domain.ports.handlers import MaybeAwaitable


@dataclass(frozen=True, slots=True)
class GroupKey:
    """Identity of one file group.

    Groups without a package file are keyed by their first lock file instead.
    """

    handler: str
    package_file: str | None
    lock_file: str | None = None

    def __str__(self) -> str:
        target = self.package_file or self.lock_file or "<repository>"
        return f"{self.handler}:{target}"


class EditStrategy(StrEnum):
    """How one upgrade is turned into file content."""

    DIRECT = "direct"
    TEXT_REPLACEMENT = "text-replacement"
    LOCKED_DEPENDENCY = "locked-dependency"
    LOCKFILE_REGENERATION = "lockfile-regeneration"
    LOCKFILE_MAINTENANCE = "lockfile-maintenance"


async def settle[T](value: MaybeAwaitable[T]) -> T:
    """Await ``value`` if a collaborator returned an awaitable."""

    if inspect.isawaitable(value):
        return await value
    return cast("T", value)
