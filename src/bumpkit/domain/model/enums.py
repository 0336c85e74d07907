"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class UpdateType(StrEnum):
    """Update type as labelled by upstream dependency resolution."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PIN = "pin"
    DIGEST = "digest"
    BUMP = "bump"
    REPLACEMENT = "replacement"
    LOCKFILE_MAINTENANCE = "lockFileMaintenance"


class UpgradeKind(StrEnum):
    """How the reconciliation core has to treat one upgrade."""

    BUMP = "bump"
    LOCKFILE_UPDATE = "lockfile-update"
    REMEDIATION = "remediation"
    LOCKFILE_MAINTENANCE = "lockfile-maintenance"
    REPLACEMENT = "replacement"


class BumpPolicy(StrEnum):
    """Release increment applied to the package's own version."""

    MAJOR = "major"
    PREMAJOR = "premajor"
    MINOR = "minor"
    PREMINOR = "preminor"
    PATCH = "patch"
    PREPATCH = "prepatch"
    PRERELEASE = "prerelease"


class FileChangeType(StrEnum):
    ADDITION = "addition"
    DELETION = "deletion"


class BranchReuse(StrEnum):
    """Tri-state branch-reuse decision.

    ``UNKNOWN`` defers to the caller's prior choice, ``MUST_REBUILD`` proves the
    existing branch is stale. Only the boundary converts to ``bool | None``.
    """

    UNKNOWN = "unknown"
    REUSABLE = "reusable"
    MUST_REBUILD = "must-rebuild"

    @classmethod
    def from_flag(cls, flag: bool | None) -> BranchReuse:
        if flag is None:
            return cls.UNKNOWN
        return cls.REUSABLE if flag else cls.MUST_REBUILD

    def as_flag(self) -> bool | None:
        if self is BranchReuse.UNKNOWN:
            return None
        return self is BranchReuse.REUSABLE
