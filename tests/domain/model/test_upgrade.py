from __future__ import annotations

import pytest

from bumpkit.domain.model import (
    BranchConfig,
    BranchReuse,
    FileChange,
    FileChangeType,
    PackageFileRef,
    UpdateType,
    Upgrade,
    UpgradeKind,
)


@pytest.mark.parametrize(
    ("upgrade", "expected"),
    [
        (Upgrade(handler="npm"), UpgradeKind.BUMP),
        (Upgrade(handler="npm", update_type=UpdateType.REPLACEMENT), UpgradeKind.REPLACEMENT),
        (Upgrade(handler="npm", is_lockfile_update=True), UpgradeKind.LOCKFILE_UPDATE),
        (
            Upgrade(handler="npm", is_lockfile_update=True, is_remediation=True),
            UpgradeKind.REMEDIATION,
        ),
        (
            Upgrade(
                handler="npm",
                update_type=UpdateType.LOCKFILE_MAINTENANCE,
                is_remediation=True,
            ),
            UpgradeKind.LOCKFILE_MAINTENANCE,
        ),
    ],
)
def test_upgrade_kind_precedence(upgrade: Upgrade, expected: UpgradeKind) -> None:
    assert upgrade.kind is expected


def test_lock_file_paths_put_single_lock_file_first() -> None:
    upgrade = Upgrade(handler="npm", lock_file="b.lock", lock_files=("a.lock", "b.lock"))

    assert upgrade.lock_file_paths == ("b.lock", "a.lock")
    assert upgrade.primary_lock_file == "b.lock"
    assert Upgrade(handler="npm").primary_lock_file is None


def test_target_value_falls_back_to_new_version() -> None:
    assert Upgrade(handler="npm", new_version="2.0.0").target_value == "2.0.0"
    assert Upgrade(handler="npm", new_value="^2", new_version="2.0.0").target_value == "^2"


def test_file_addition_requires_contents() -> None:
    with pytest.raises(ValueError, match="a.txt"):
        FileChange(path="a.txt")

    deletion = FileChange.deletion("a.txt")
    assert deletion.type is FileChangeType.DELETION
    assert deletion.contents is None


@pytest.mark.parametrize(
    ("flag", "reuse"),
    [(None, BranchReuse.UNKNOWN), (True, BranchReuse.REUSABLE), (False, BranchReuse.MUST_REBUILD)],
)
def test_branch_reuse_flag_round_trip(flag: bool | None, reuse: BranchReuse) -> None:
    assert BranchReuse.from_flag(flag) is reuse
    assert reuse.as_flag() is flag


def test_branch_config_package_file_lookup() -> None:
    ref = PackageFileRef(package_file="composer.json", lock_files=("composer.lock",))
    config = BranchConfig(base_branch="main", package_files={"composer": (ref,)})

    assert config.package_file_ref("composer", "composer.json") is ref
    assert config.package_file_ref("composer", "other.json") is None
    assert config.package_file_ref("composer", None) is None
    assert config.package_file_order("composer") == ("composer.json",)
    assert config.package_file_order("npm") == ()


@pytest.mark.parametrize(
    ("change", "content", "expected"),
    [
        (FileChange(path="a.lock", contents="same"), "same", True),
        (FileChange(path="a.lock", contents=b"same"), "same", True),
        (FileChange(path="a.lock", contents=b"\xff"), "same", False),
        (FileChange(path="a.lock", contents="same"), None, False),
        (FileChange.deletion("a.lock"), None, True),
        (FileChange.deletion("a.lock"), "same", False),
    ],
)
def test_file_change_matches_existing_content(
    change: FileChange, content: str | None, expected: bool
) -> None:
    assert change.matches(content) is expected
