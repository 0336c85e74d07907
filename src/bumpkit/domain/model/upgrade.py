"""Upgrade intents produced upstream by dependency resolution."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import BumpPolicy, UpdateType, UpgradeKind


@dataclass(frozen=True, slots=True, kw_only=True)
class Upgrade:
    """One proposed dependency change, consumed read-only by reconciliation.

    ``package_file`` is absent for whole-repository actions such as lockfile
    maintenance or a remediation that only touches a lock file.
    """

    handler: str
    package_file: str | None = None
    branch_name: str | None = None
    update_type: UpdateType | None = None
    dep_name: str | None = None
    current_value: str | None = None
    current_version: str | None = None
    new_value: str | None = None
    new_version: str | None = None
    new_name: str | None = None
    replace_string: str | None = None
    lock_file: str | None = None
    lock_files: tuple[str, ...] = ()
    bump_version: BumpPolicy | None = None
    package_file_version: str | None = None
    is_lockfile_update: bool = False
    is_remediation: bool = False

    @property
    def kind(self) -> UpgradeKind:
        if self.update_type is UpdateType.LOCKFILE_MAINTENANCE:
            return UpgradeKind.LOCKFILE_MAINTENANCE
        if self.is_remediation:
            return UpgradeKind.REMEDIATION
        if self.is_lockfile_update:
            return UpgradeKind.LOCKFILE_UPDATE
        if self.update_type is UpdateType.REPLACEMENT:
            return UpgradeKind.REPLACEMENT
        return UpgradeKind.BUMP

    @property
    def lock_file_paths(self) -> tuple[str, ...]:
        paths: list[str] = []
        for path in (self.lock_file, *self.lock_files):
            if path and path not in paths:
                paths.append(path)
        return tuple(paths)

    @property
    def primary_lock_file(self) -> str | None:
        paths = self.lock_file_paths
        return paths[0] if paths else None

    @property
    def target_value(self) -> str | None:
        """Textual value the dependency should end up with."""

        return self.new_value if self.new_value is not None else self.new_version
