"""Domain model for dependency upgrades and the file changes they produce."""

from __future__ import annotations

from .branch import BranchConfig, PackageFileRef
from .changes import ArtifactError, ArtifactNotice, ArtifactResult, FileChange
from .enums import BranchReuse, BumpPolicy, FileChangeType, UpdateType, UpgradeKind
from .upgrade import Upgrade

__all__ = [
    "ArtifactError",
    "ArtifactNotice",
    "ArtifactResult",
    "BranchConfig",
    "BranchReuse",
    "BumpPolicy",
    "FileChange",
    "FileChangeType",
    "PackageFileRef",
    "UpdateType",
    "Upgrade",
    "UpgradeKind",
]
