"""Capability ports implemented by per-ecosystem handlers.

A handler implements any subset of these capabilities. The reconciliation core
checks which ones are present to pick an edit strategy; it never inspects the
handler's type. Every capability may be synchronous or return an awaitable.
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from bumpkit.domain.model import ArtifactResult, BumpPolicy, Upgrade


type MaybeAwaitable[T] = T | Awaitable[T]


class LockedUpdateStatus(StrEnum):
    UPDATED = "updated"
    ALREADY_UPDATED = "already-updated"
    UNSUPPORTED = "unsupported"
    UPDATE_FAILED = "update-failed"


def _no_files() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True, kw_only=True)
class LockedUpdateResult:
    """Outcome of a targeted locked-dependency update.

    ``files`` maps paths to new contents and is only meaningful for
    ``UPDATED``.
    """

    status: LockedUpdateStatus
    files: Mapping[str, str] = field(default_factory=_no_files)

    @classmethod
    def updated(cls, files: Mapping[str, str]) -> LockedUpdateResult:
        return cls(status=LockedUpdateStatus.UPDATED, files=MappingProxyType(dict(files)))

    @classmethod
    def already_updated(cls) -> LockedUpdateResult:
        return cls(status=LockedUpdateStatus.ALREADY_UPDATED)

    @classmethod
    def unsupported(cls) -> LockedUpdateResult:
        return cls(status=LockedUpdateStatus.UNSUPPORTED)


@dataclass(frozen=True, slots=True, kw_only=True)
class LockedDependencyRequest:
    package_file: str | None
    package_file_content: str | None
    lock_file: str | None
    lock_file_content: str | None
    dep_name: str | None
    current_value: str | None
    current_version: str | None
    new_version: str | None
    allow_parent_updates: bool = False
    allow_higher_or_removed: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class ArtifactRequest:
    """Input for one artifact generation call (one call per file group)."""

    package_file_name: str | None
    new_package_file_content: str | None
    updated_deps: tuple[Upgrade, ...]
    lock_files: tuple[str, ...]
    base_branch: str
    is_lockfile_maintenance: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class BumpResult:
    bumped_content: str | None = None


class ArtifactGenerationError(RuntimeError):
    """Raised by a handler when regenerating a lock file fails.

    The reconciliation core records it as an artifact error instead of
    aborting the pass.
    """

    def __init__(self, message: str, *, lock_file: str | None = None) -> None:
        super().__init__(message)
        self.lock_file = lock_file


class UpdateDependency(Protocol):
    """Rewrite ``content`` for ``upgrade``; ``None`` signals failure."""

    def __call__(self, content: str, upgrade: Upgrade) -> MaybeAwaitable[str | None]: ...


class UpdateLockedDependency(Protocol):
    def __call__(self, request: LockedDependencyRequest) -> MaybeAwaitable[LockedUpdateResult]: ...


class UpdateArtifacts(Protocol):
    def __call__(
        self, request: ArtifactRequest
    ) -> MaybeAwaitable[Sequence[ArtifactResult] | None]: ...


class BumpPackageVersion(Protocol):
    def __call__(
        self,
        content: str,
        current_version: str | None,
        policy: BumpPolicy,
    ) -> MaybeAwaitable[BumpResult | None]: ...


class ReplaceText(Protocol):
    """Replace ``old_value`` by ``new_value`` in raw content; ``None`` if not found."""

    def __call__(
        self, content: str, old_value: str, new_value: str
    ) -> MaybeAwaitable[str | None]: ...


@dataclass(frozen=True, slots=True, kw_only=True)
class Handler:
    """Capability set of one ecosystem handler, keyed by ``name``."""

    name: str
    update_dependency: UpdateDependency | None = None
    update_locked_dependency: UpdateLockedDependency | None = None
    update_artifacts: UpdateArtifacts | None = None
    bump_package_version: BumpPackageVersion | None = None


__all__ = [
    "ArtifactGenerationError",
    "ArtifactRequest",
    "BumpPackageVersion",
    "BumpResult",
    "Handler",
    "LockedDependencyRequest",
    "LockedUpdateResult",
    "LockedUpdateStatus",
    "MaybeAwaitable",
    "ReplaceText",
    "UpdateArtifacts",
    "UpdateDependency",
    "UpdateLockedDependency",
]
