"""Artifact invocation: one regeneration call per eligible file group.

Responsibilities of this stage:
- decide which groups need artifact generation
- order the calls by each handler's own package-file enumeration
- resolve the lock files handed to the handler
- route every result part into the outcome, dropping no-op artifacts
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from bumpkit.domain.model import ArtifactError
from bumpkit.domain.ports.handlers import ArtifactGenerationError, ArtifactRequest

from .contracts import settle

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bumpkit.domain.model import ArtifactResult, BranchConfig, FileChange
    from bumpkit.domain.registry import HandlerRegistry

    from .group import FileGroup
    from .outcome import OutcomeCollector
    from .workspace import BranchWorkspace

log = getLogger(__name__)


def resolve_lock_files(group: FileGroup, config: BranchConfig) -> tuple[str, ...]:
    """Lock files for ``group``: configured mapping, then the group's own, then the branch's."""

    ref = config.package_file_ref(group.handler, group.package_file)
    if ref is not None and ref.lock_files:
        return ref.lock_files
    if group.lock_files:
        return group.lock_files
    return config.lock_files


def artifact_order(groups: Iterable[FileGroup], config: BranchConfig) -> list[FileGroup]:
    """Order groups for artifact generation.

    Handlers keep their first-seen order. Within one handler, groups follow the
    handler's package-file enumeration; files it does not list come first, in
    input order.
    """

    by_handler: dict[str, list[FileGroup]] = {}
    for group in groups:
        by_handler.setdefault(group.handler, []).append(group)

    ordered: list[FileGroup] = []
    for handler, members in by_handler.items():
        enumeration = config.package_file_order(handler)

        def position(group: FileGroup, enumeration: tuple[str, ...] = enumeration) -> int:
            if group.package_file in enumeration:
                return enumeration.index(group.package_file)
            return -1

        ordered.extend(sorted(members, key=position))
    return ordered


class ArtifactInvoker:
    """Invoke ``update_artifacts`` at most once per group and collect its results."""

    def __init__(
        self,
        *,
        handlers: HandlerRegistry,
        workspace: BranchWorkspace,
        collector: OutcomeCollector,
    ) -> None:
        self._handlers = handlers
        self._workspace = workspace
        self._collector = collector

    def needs_artifacts(self, group: FileGroup) -> bool:
        return (
            self._workspace.is_updated(group.package_file)
            or group.requires_artifacts
            or group.is_lockfile_maintenance
        )

    async def invoke(self, group: FileGroup, config: BranchConfig) -> None:
        handler = self._handlers.resolve(group.handler)
        if handler.update_artifacts is None:
            return
        if not self.needs_artifacts(group):
            log.debug("No artifact update needed for %s", group.key)
            return

        lock_files = resolve_lock_files(group, config)
        request = ArtifactRequest(
            package_file_name=group.package_file,
            new_package_file_content=await self._workspace.current(group.package_file),
            updated_deps=tuple(group.upgrades),
            lock_files=lock_files,
            base_branch=config.base_branch,
            is_lockfile_maintenance=group.is_lockfile_maintenance,
        )
        log.debug("Updating artifacts for %s (lock files: %s)", group.key, list(lock_files))
        try:
            results = await settle(handler.update_artifacts(request))
        except ArtifactGenerationError as exc:
            log.warning("Artifact generation failed for %s: %s", group.key, exc)
            lock_file = exc.lock_file or (lock_files[0] if lock_files else None)
            self._collector.add_error(ArtifactError(lock_file=lock_file, stderr=str(exc)))
            return

        for result in results or ():
            await self._record(result)

    async def _record(self, result: ArtifactResult) -> None:
        if result.file is not None:
            await self._record_file(result.file)
        if result.artifact_error is not None:
            self._collector.add_error(result.artifact_error)
        if result.notice is not None:
            self._collector.add_notice(result.notice)

    async def _record_file(self, change: FileChange) -> None:
        if change.matches(await self._workspace.current(change.path)):
            log.debug("Artifact %s unchanged", change.path)
            return
        branch_content = await self._workspace.original(change.path)
        self._collector.arbiter.observe_artifact(change, branch_content=branch_content)
        self._collector.add_artifact(change)
