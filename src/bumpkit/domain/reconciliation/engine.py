"""Reconciliation engine: upgrades in, branch file changes out."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from bumpkit.domain.model import BranchReuse
from bumpkit.domain.registry import HandlerRegistry

from .artifacts import ArtifactInvoker, artifact_order
from .content import ContentReconciler
from .errors import BranchRebaseRequired
from .group import group_upgrades, validate_upgrades
from .outcome import BranchReuseArbiter, OutcomeCollector
from .workspace import BranchWorkspace

if TYPE_CHECKING:
    from bumpkit.domain.model import BranchConfig
    from bumpkit.domain.ports.content import FileContentSource
    from bumpkit.domain.ports.handlers import ReplaceText

    from .outcome import ReconciliationOutcome

log = getLogger(__name__)


class ReconciliationEngine:
    """Turn a branch config into the file changes that make up its branch.

    The engine holds only read-only collaborators; every call to
    ``reconcile`` is an independent pass.
    """

    def __init__(
        self,
        content_source: FileContentSource,
        *,
        replace_text: ReplaceText,
        handlers: HandlerRegistry | None = None,
    ) -> None:
        self._content_source = content_source
        self._handlers = handlers if handlers is not None else HandlerRegistry()
        self._replace_text = replace_text

    def reconcile(self, config: BranchConfig) -> ReconciliationOutcome:
        return asyncio.run(self.reconcile_async(config))

    async def reconcile_async(self, config: BranchConfig) -> ReconciliationOutcome:
        validate_upgrades(config)
        reuse = BranchReuse.from_flag(config.reuse_existing_branch)
        try:
            return await self._run_pass(config, reuse)
        except BranchRebaseRequired as signal:
            log.info(
                "Recomputing %s against %s: %s",
                self._branch_name(config) or "branch",
                config.base_branch,
                signal.reason,
            )
            return await self._run_pass(config, BranchReuse.MUST_REBUILD)

    async def _run_pass(self, config: BranchConfig, reuse: BranchReuse) -> ReconciliationOutcome:
        workspace = BranchWorkspace(self._content_source, self._read_ref(config, reuse))
        arbiter = BranchReuseArbiter(reuse)
        collector = OutcomeCollector(arbiter)
        groups = group_upgrades(config.upgrades)
        log.debug(
            "Reconciling %d upgrade(s) in %d group(s) from %s",
            len(config.upgrades),
            len(groups),
            workspace.ref,
        )

        reconciler = ContentReconciler(
            handlers=self._handlers,
            replace_text=self._replace_text,
            workspace=workspace,
            arbiter=arbiter,
        )
        for group in groups:
            await reconciler.reconcile(group)

        invoker = ArtifactInvoker(handlers=self._handlers, workspace=workspace, collector=collector)
        for group in artifact_order(groups, config):
            await invoker.invoke(group, config)

        outcome = collector.build(updated_package_files=workspace.updated_files())
        if arbiter.reason is not None:
            log.debug("Branch reuse decision: %s (%s)", arbiter.decision, arbiter.reason)
        return outcome

    def _read_ref(self, config: BranchConfig, reuse: BranchReuse) -> str:
        if reuse is BranchReuse.REUSABLE:
            return self._branch_name(config) or config.base_branch
        return config.base_branch

    @staticmethod
    def _branch_name(config: BranchConfig) -> str | None:
        if config.branch_name:
            return config.branch_name
        names = (upgrade.branch_name for upgrade in config.upgrades if upgrade.branch_name)
        return next(names, None)
