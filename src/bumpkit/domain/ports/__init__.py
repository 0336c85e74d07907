"""Domain port definitions for adapters and ecosystem handlers."""

from __future__ import annotations

from .content import FileContentSource
from .handlers import (
    ArtifactGenerationError,
    ArtifactRequest,
    BumpPackageVersion,
    BumpResult,
    Handler,
    LockedDependencyRequest,
    LockedUpdateResult,
    LockedUpdateStatus,
    ReplaceText,
    UpdateArtifacts,
    UpdateDependency,
    UpdateLockedDependency,
)

__all__ = [
    "ArtifactGenerationError",
    "ArtifactRequest",
    "BumpPackageVersion",
    "BumpResult",
    "FileContentSource",
    "Handler",
    "LockedDependencyRequest",
    "LockedUpdateResult",
    "LockedUpdateStatus",
    "ReplaceText",
    "UpdateArtifacts",
    "UpdateDependency",
    "UpdateLockedDependency",
]
