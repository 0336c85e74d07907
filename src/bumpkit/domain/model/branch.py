"""Branch-level input handed to the reconciliation core."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .upgrade import Upgrade


@dataclass(frozen=True, slots=True, kw_only=True)
class PackageFileRef:
    """A package file as enumerated by its handler, with its lock files."""

    package_file: str
    lock_files: tuple[str, ...] = ()


def _empty_package_files() -> Mapping[str, tuple[PackageFileRef, ...]]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True, kw_only=True)
class BranchConfig:
    """Everything one reconciliation pass needs to know about its branch.

    ``package_files`` maps a handler identifier to the package files that
    handler enumerated, in its own order. That order drives the order of
    artifact generation calls.
    """

    base_branch: str
    branch_name: str | None = None
    upgrades: tuple[Upgrade, ...] = ()
    reuse_existing_branch: bool | None = None
    lock_files: tuple[str, ...] = ()
    package_files: Mapping[str, tuple[PackageFileRef, ...]] = field(
        default_factory=_empty_package_files
    )

    def package_file_ref(self, handler: str, package_file: str | None) -> PackageFileRef | None:
        if package_file is None:
            return None
        for ref in self.package_files.get(handler, ()):
            if ref.package_file == package_file:
                return ref
        return None

    def package_file_order(self, handler: str) -> tuple[str, ...]:
        return tuple(ref.package_file for ref in self.package_files.get(handler, ()))
