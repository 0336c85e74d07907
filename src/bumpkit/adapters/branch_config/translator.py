"""Translate between branch-config JSON payloads and domain objects."""

from __future__ import annotations

import base64
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING

from pydantic import ValidationError

from bumpkit.domain.model import (
    BranchConfig,
    FileChange,
    FileChangeType,
    PackageFileRef,
    Upgrade,
)
from bumpkit.domain.reconciliation import InvalidUpgradeError

from .schema import (
    ArtifactErrorPayload,
    ArtifactNoticePayload,
    BranchConfigPayload,
    FileChangePayload,
    OutcomePayload,
    UpgradePayload,
)

if TYPE_CHECKING:
    from pathlib import Path

    from bumpkit.domain.reconciliation import ReconciliationOutcome

log = getLogger(__name__)


def parse_upgrade(payload: UpgradePayload) -> Upgrade:
    return Upgrade(
        handler=payload.handler,
        package_file=payload.package_file,
        branch_name=payload.branch_name,
        update_type=payload.update_type,
        dep_name=payload.dep_name,
        current_value=payload.current_value,
        current_version=payload.current_version,
        new_value=payload.new_value,
        new_version=payload.new_version,
        new_name=payload.new_name,
        replace_string=payload.replace_string,
        lock_file=payload.lock_file,
        lock_files=tuple(payload.lock_files),
        bump_version=payload.bump_version,
        package_file_version=payload.package_file_version,
        is_lockfile_update=payload.is_lockfile_update,
        is_remediation=payload.is_remediation,
    )


def parse_branch_config(payload: BranchConfigPayload | str | bytes) -> BranchConfig:
    """Build a ``BranchConfig`` from a validated payload or raw JSON."""

    if not isinstance(payload, BranchConfigPayload):
        try:
            payload = BranchConfigPayload.model_validate_json(payload)
        except ValidationError as exc:
            raise InvalidUpgradeError(f"Invalid branch config: {exc}") from exc

    package_files = {
        handler: tuple(
            PackageFileRef(package_file=ref.package_file, lock_files=tuple(ref.lock_files))
            for ref in refs
        )
        for handler, refs in payload.package_files.items()
    }
    return BranchConfig(
        base_branch=payload.base_branch,
        branch_name=payload.branch_name,
        upgrades=tuple(parse_upgrade(upgrade) for upgrade in payload.upgrades),
        reuse_existing_branch=payload.reuse_existing_branch,
        lock_files=tuple(payload.lock_files),
        package_files=MappingProxyType(package_files),
    )


def load_branch_config(path: Path) -> BranchConfig:
    log.debug("Loading branch config from %s", path)
    return parse_branch_config(path.read_bytes())


def file_change_payload(change: FileChange) -> FileChangePayload:
    if change.type is FileChangeType.DELETION or change.contents is None:
        return FileChangePayload(type=change.type.value, path=change.path)
    if isinstance(change.contents, bytes):
        return FileChangePayload(
            type=change.type.value,
            path=change.path,
            contents=base64.b64encode(change.contents).decode("ascii"),
            encoding="base64",
        )
    return FileChangePayload(type=change.type.value, path=change.path, contents=change.contents)


def outcome_payload(outcome: ReconciliationOutcome) -> OutcomePayload:
    return OutcomePayload(
        updated_package_files=[file_change_payload(c) for c in outcome.updated_package_files],
        updated_artifacts=[file_change_payload(c) for c in outcome.updated_artifacts],
        artifact_errors=[
            ArtifactErrorPayload(lock_file=error.lock_file, stderr=error.stderr)
            for error in outcome.artifact_errors
        ],
        artifact_notices=[
            ArtifactNoticePayload(file=notice.file, message=notice.message)
            for notice in outcome.artifact_notices
        ],
        reuse_existing_branch=outcome.reuse_existing_branch,
    )


def dump_outcome(outcome: ReconciliationOutcome, *, indent: int | None = 2) -> str:
    return outcome_payload(outcome).model_dump_json(by_alias=True, indent=indent)
