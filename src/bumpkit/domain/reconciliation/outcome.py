"""Outcome aggregation and branch-reuse arbitration.

The aggregator is the only stage with a global view of the pass. It keeps
first-seen order for every list and decides whether the caller may keep
amending the existing branch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from bumpkit.domain.model import BranchReuse

if TYPE_CHECKING:
    from bumpkit.domain.model import ArtifactError, ArtifactNotice, FileChange

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class ReconciliationOutcome:
    """Final result of one reconciliation pass.

    ``reuse_existing_branch`` is ``None`` when the pass found no evidence
    either way and ``False`` when the existing branch is proven stale.
    """

    updated_package_files: list[FileChange] = field(default_factory=list["FileChange"])
    updated_artifacts: list[FileChange] = field(default_factory=list["FileChange"])
    artifact_errors: list[ArtifactError] = field(default_factory=list["ArtifactError"])
    artifact_notices: list[ArtifactNotice] = field(default_factory=list["ArtifactNotice"])
    reuse_existing_branch: bool | None = None

    @property
    def has_changes(self) -> bool:
        return bool(self.updated_package_files or self.updated_artifacts)


@dataclass(slots=True)
class BranchReuseArbiter:
    """Track the tri-state branch-reuse decision across one pass.

    ``assumed`` is the decision the pass started from. Evidence is judged
    against that assumption, and the most recent decisive signal is kept in
    ``reason`` for diagnostics.
    """

    assumed: BranchReuse
    decision: BranchReuse = field(init=False)
    reason: str | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.decision = self.assumed

    @property
    def assumes_reusable(self) -> bool:
        return self.assumed is BranchReuse.REUSABLE

    def must_rebuild(self, reason: str) -> None:
        if self.decision is not BranchReuse.MUST_REBUILD:
            log.debug("Existing branch must be rebuilt: %s", reason)
        self.decision = BranchReuse.MUST_REBUILD
        self.reason = reason

    def observe_already_updated(self, dep_name: str | None) -> None:
        if self.assumes_reusable:
            self.must_rebuild(f"{dep_name or 'dependency'} is already updated in the lock file")

    def observe_notice(self, notice: ArtifactNotice) -> None:
        self.must_rebuild(f"artifact notice for {notice.file}")

    def observe_artifact(self, change: FileChange, *, branch_content: str | None) -> None:
        if self.assumes_reusable and not change.matches(branch_content):
            self.must_rebuild(f"artifact {change.path} differs from branch content")


@dataclass(slots=True)
class OutcomeCollector:
    """Accumulate artifact results for the final outcome."""

    arbiter: BranchReuseArbiter
    updated_artifacts: list[FileChange] = field(default_factory=list["FileChange"])
    artifact_errors: list[ArtifactError] = field(default_factory=list["ArtifactError"])
    artifact_notices: list[ArtifactNotice] = field(default_factory=list["ArtifactNotice"])

    def add_artifact(self, change: FileChange) -> None:
        self.updated_artifacts.append(change)

    def add_error(self, error: ArtifactError) -> None:
        self.artifact_errors.append(error)

    def add_notice(self, notice: ArtifactNotice) -> None:
        self.artifact_notices.append(notice)
        self.arbiter.observe_notice(notice)

    def build(self, *, updated_package_files: list[FileChange]) -> ReconciliationOutcome:
        return ReconciliationOutcome(
            updated_package_files=updated_package_files,
            updated_artifacts=list(self.updated_artifacts),
            artifact_errors=list(self.artifact_errors),
            artifact_notices=list(self.artifact_notices),
            reuse_existing_branch=self.arbiter.decision.as_flag(),
        )
