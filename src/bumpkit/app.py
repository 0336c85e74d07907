"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from bumpkit.adapters.content import (
    HttpContentSource,
    LocalCheckoutContentSource,
    resolve_within,
)
from bumpkit.adapters.text_replace import replace_first_occurrence
from bumpkit.config import get_raw_content_config
from bumpkit.domain.model import FileChangeType
from bumpkit.domain.reconciliation import ReconciliationEngine
from bumpkit.domain.registry import HandlerRegistry

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from bumpkit.domain.model import BranchConfig, FileChange
    from bumpkit.domain.ports.content import FileContentSource
    from bumpkit.domain.ports.handlers import ReplaceText
    from bumpkit.domain.reconciliation import ReconciliationOutcome


log = getLogger(__name__)


def build_content_source(
    *,
    repo_dir: Path | None = None,
    remote: bool = False,
    worktrees: Mapping[str, Path] | None = None,
) -> FileContentSource:
    """Pick the content source for a CLI run: raw HTTP or a local checkout.

    Without ``worktrees`` a local checkout serves every branch from
    ``repo_dir``, so reused-branch runs see the base branch content.
    """

    if remote:
        return HttpContentSource(config=get_raw_content_config())
    return LocalCheckoutContentSource(root=repo_dir or Path.cwd(), worktrees=dict(worktrees or {}))


def reconcile_branch(
    config: BranchConfig,
    *,
    source: FileContentSource,
    handlers: HandlerRegistry | None = None,
    replace_text: ReplaceText = replace_first_occurrence,
) -> ReconciliationOutcome:
    """Reconcile one branch config using the configured adapters."""

    registry = handlers if handlers is not None else HandlerRegistry.from_entry_points()
    engine = ReconciliationEngine(source, handlers=registry, replace_text=replace_text)
    log.info(
        "Reconciling %d upgrade(s) for %s (base %s, %d handler(s) registered)",
        len(config.upgrades),
        config.branch_name or "<per-upgrade branches>",
        config.base_branch,
        len(registry),
    )

    outcome = asyncio.run(_reconcile(engine, config, source))

    log.info(
        "Finished reconciliation: files=%d, artifacts=%d, errors=%d, notices=%d, reuse=%s",
        len(outcome.updated_package_files),
        len(outcome.updated_artifacts),
        len(outcome.artifact_errors),
        len(outcome.artifact_notices),
        outcome.reuse_existing_branch,
    )
    return outcome


async def _reconcile(
    engine: ReconciliationEngine,
    config: BranchConfig,
    source: FileContentSource,
) -> ReconciliationOutcome:
    if isinstance(source, HttpContentSource):
        async with source:
            return await engine.reconcile_async(config)
    return await engine.reconcile_async(config)


def write_changes(root: Path, changes: Iterable[FileChange]) -> list[Path]:
    """Apply file changes to the checkout at ``root``; return the touched paths."""

    touched: list[Path] = []
    for change in changes:
        target = resolve_within(root, change.path)
        if change.type is FileChangeType.DELETION:
            target.unlink(missing_ok=True)
        elif isinstance(change.contents, bytes):
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(change.contents)
        elif change.contents is not None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(change.contents, encoding="utf-8")
        log.debug("Applied %s to %s", change.type, target)
        touched.append(target)
    return touched
