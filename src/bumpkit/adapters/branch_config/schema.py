"""Pydantic models describing branch-config input and outcome output JSON."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from bumpkit.domain.model import BumpPolicy, UpdateType


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class BranchConfigBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class UpgradePayload(BranchConfigBaseModel):
    handler: str = Field(validation_alias=AliasChoices("handler", "manager"))
    package_file: str | None = Field(default=None, alias="packageFile")
    branch_name: str | None = Field(default=None, alias="branchName")
    update_type: UpdateType | None = Field(default=None, alias="updateType")
    dep_name: str | None = Field(default=None, alias="depName")
    current_value: str | None = Field(default=None, alias="currentValue")
    current_version: str | None = Field(default=None, alias="currentVersion")
    new_value: str | None = Field(default=None, alias="newValue")
    new_version: str | None = Field(default=None, alias="newVersion")
    new_name: str | None = Field(default=None, alias="newName")
    replace_string: str | None = Field(default=None, alias="replaceString")
    lock_file: str | None = Field(default=None, alias="lockFile")
    lock_files: list[str] = Field(default_factory=list, alias="lockFiles")
    bump_version: BumpPolicy | None = Field(default=None, alias="bumpVersion")
    package_file_version: str | None = Field(default=None, alias="packageFileVersion")
    is_lockfile_update: bool = Field(default=False, alias="isLockfileUpdate")
    is_remediation: bool = Field(default=False, alias="isRemediation")

    _normalize_blank = field_validator(
        "package_file", "branch_name", "lock_file", "bump_version", mode="before"
    )(_blank_to_none)


class PackageFilePayload(BranchConfigBaseModel):
    package_file: str = Field(alias="packageFile")
    lock_files: list[str] = Field(default_factory=list, alias="lockFiles")


class BranchConfigPayload(BranchConfigBaseModel):
    base_branch: str = Field(alias="baseBranch")
    branch_name: str | None = Field(default=None, alias="branchName")
    reuse_existing_branch: bool | None = Field(default=None, alias="reuseExistingBranch")
    lock_files: list[str] = Field(default_factory=list, alias="lockFiles")
    package_files: dict[str, list[PackageFilePayload]] = Field(
        default_factory=dict, alias="packageFiles"
    )
    upgrades: list[UpgradePayload] = Field(default_factory=list)

    _normalize_branch = field_validator("branch_name", mode="before")(_blank_to_none)


class OutcomeBaseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class FileChangePayload(OutcomeBaseModel):
    type: Literal["addition", "deletion"]
    path: str
    contents: str | None = None
    encoding: Literal["utf-8", "base64"] | None = None


class ArtifactErrorPayload(OutcomeBaseModel):
    lock_file: str | None = Field(default=None, alias="lockFile")
    stderr: str | None = None


class ArtifactNoticePayload(OutcomeBaseModel):
    file: str
    message: str


class OutcomePayload(OutcomeBaseModel):
    updated_package_files: list[FileChangePayload] = Field(alias="updatedPackageFiles")
    updated_artifacts: list[FileChangePayload] = Field(alias="updatedArtifacts")
    artifact_errors: list[ArtifactErrorPayload] = Field(alias="artifactErrors")
    artifact_notices: list[ArtifactNoticePayload] = Field(alias="artifactNotices")
    reuse_existing_branch: bool | None = Field(default=None, alias="reuseExistingBranch")
