"""Upgrade grouping by target file and responsible handler.

Responsibilities of this stage:
- partition upgrades into file groups keyed by (package file, handler)
- key file-less upgrades by handler + lock file instead
- preserve first-seen order of keys and input order within a group
- reject upgrades that cannot be attributed to a branch before any I/O
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bumpkit.domain.model import UpgradeKind

from .contracts import GroupKey
from .errors import InvalidUpgradeError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bumpkit.domain.model import BranchConfig, Upgrade


@dataclass(slots=True)
class FileGroup:
    """All upgrades of one pass sharing a target file and handler.

    The folded content lives in the pass workspace, not on the group.
    ``requires_artifacts`` marks groups that need regeneration even when the
    package file itself did not change.
    """

    key: GroupKey
    upgrades: list[Upgrade] = field(default_factory=list["Upgrade"])
    requires_artifacts: bool = False

    @property
    def handler(self) -> str:
        return self.key.handler

    @property
    def package_file(self) -> str | None:
        return self.key.package_file

    @property
    def is_lockfile_maintenance(self) -> bool:
        return any(
            upgrade.kind is UpgradeKind.LOCKFILE_MAINTENANCE for upgrade in self.upgrades
        )

    @property
    def lock_files(self) -> tuple[str, ...]:
        paths: list[str] = []
        for upgrade in self.upgrades:
            for path in upgrade.lock_file_paths:
                if path not in paths:
                    paths.append(path)
        return tuple(paths)


def group_key_for(upgrade: Upgrade) -> GroupKey:
    if upgrade.package_file:
        return GroupKey(handler=upgrade.handler, package_file=upgrade.package_file)
    return GroupKey(
        handler=upgrade.handler,
        package_file=None,
        lock_file=upgrade.primary_lock_file,
    )


def group_upgrades(upgrades: Iterable[Upgrade]) -> list[FileGroup]:
    """Partition ``upgrades`` into groups in first-seen key order."""

    groups: dict[GroupKey, FileGroup] = {}
    for upgrade in upgrades:
        key = group_key_for(upgrade)
        group = groups.get(key)
        if group is None:
            group = FileGroup(key=key)
            groups[key] = group
        group.upgrades.append(upgrade)
    return list(groups.values())


def validate_upgrades(config: BranchConfig) -> None:
    """Check per-upgrade preconditions for ``config``.

    Every upgrade except replacements needs a resolvable branch name, either
    its own or the branch config's.
    """

    for upgrade in config.upgrades:
        if upgrade.kind is UpgradeKind.REPLACEMENT:
            continue
        if upgrade.branch_name is None and config.branch_name is None:
            raise InvalidUpgradeError(
                f"Upgrade of {upgrade.dep_name or '<unnamed>'} for handler "
                f"{upgrade.handler} has no branch name"
            )
