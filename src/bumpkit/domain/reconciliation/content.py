"""Content reconciliation: fold every upgrade of a group over its file.

Each step takes the content produced by the previous step. The folded result
is written to the pass workspace, which drops it again if it equals the
original content.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from bumpkit.domain.ports.handlers import LockedDependencyRequest, LockedUpdateStatus

from .contracts import EditStrategy, settle
from .errors import BranchRebaseRequired, FileUpdateError
from .strategy import replacement_texts, select_strategy

if TYPE_CHECKING:
    from bumpkit.domain.model import Upgrade
    from bumpkit.domain.ports.handlers import (
        Handler,
        ReplaceText,
        UpdateDependency,
        UpdateLockedDependency,
    )
    from bumpkit.domain.registry import HandlerRegistry

    from .group import FileGroup
    from .outcome import BranchReuseArbiter
    from .workspace import BranchWorkspace

log = getLogger(__name__)


class ContentReconciler:
    """Apply the edit strategy of every upgrade in a group, in input order."""

    def __init__(
        self,
        *,
        handlers: HandlerRegistry,
        replace_text: ReplaceText,
        workspace: BranchWorkspace,
        arbiter: BranchReuseArbiter,
    ) -> None:
        self._handlers = handlers
        self._replace_text = replace_text
        self._workspace = workspace
        self._arbiter = arbiter

    async def reconcile(self, group: FileGroup) -> None:
        handler = self._handlers.resolve(group.handler)
        content = await self._workspace.current(group.package_file)

        for upgrade in group.upgrades:
            strategy = select_strategy(upgrade, handler)
            log.debug(
                "Applying %s to %s in %s",
                strategy,
                upgrade.dep_name or "<unnamed>",
                group.key,
            )
            content = await self._apply(strategy, group, handler, upgrade, content)

        content = await self._bump(group, handler, content)
        if group.package_file is not None and content is not None:
            await self._workspace.write(group.package_file, content)

    async def _apply(
        self,
        strategy: EditStrategy,
        group: FileGroup,
        handler: Handler,
        upgrade: Upgrade,
        content: str | None,
    ) -> str | None:
        match strategy:
            case EditStrategy.LOCKFILE_MAINTENANCE:
                return content
            case EditStrategy.LOCKFILE_REGENERATION:
                group.requires_artifacts = True
                return content
            case EditStrategy.LOCKED_DEPENDENCY if handler.update_locked_dependency is not None:
                return await self._update_locked(
                    group, handler.update_locked_dependency, upgrade, content
                )
            case EditStrategy.DIRECT if handler.update_dependency is not None:
                return await self._update_direct(group, handler.update_dependency, upgrade, content)
            case _:
                return await self._replace(group, upgrade, content)

    async def _update_direct(
        self,
        group: FileGroup,
        update_dependency: UpdateDependency,
        upgrade: Upgrade,
        content: str | None,
    ) -> str:
        content = self._require_content(group, upgrade, content)
        new_content = await settle(update_dependency(content, upgrade))
        if new_content is None:
            if self._arbiter.assumes_reusable:
                raise BranchRebaseRequired(f"update of {upgrade.dep_name} failed on the branch")
            raise self._failure("Dependency update failed", group, upgrade)
        if new_content != content and self._arbiter.assumes_reusable:
            raise BranchRebaseRequired(f"{group.package_file} needs changes on the branch")
        return new_content

    async def _replace(self, group: FileGroup, upgrade: Upgrade, content: str | None) -> str:
        content = self._require_content(group, upgrade, content)
        texts = replacement_texts(upgrade)
        if texts is None:
            raise self._failure("No replacement text available", group, upgrade)
        old_text, new_text = texts
        new_content = await settle(self._replace_text(content, old_text, new_text))
        if new_content is None:
            if self._arbiter.assumes_reusable:
                raise BranchRebaseRequired(f"{old_text!r} not found on the branch")
            raise self._failure("Text replacement failed", group, upgrade)
        return new_content

    async def _update_locked(
        self,
        group: FileGroup,
        update_locked_dependency: UpdateLockedDependency,
        upgrade: Upgrade,
        content: str | None,
    ) -> str | None:
        reusable = self._arbiter.assumes_reusable
        lock_file = upgrade.primary_lock_file
        lock_file_content = await self._workspace.current(lock_file)
        if reusable and lock_file is not None and lock_file_content is None:
            raise BranchRebaseRequired(f"lock file {lock_file} missing on the branch")

        request = LockedDependencyRequest(
            package_file=group.package_file,
            package_file_content=content,
            lock_file=lock_file,
            lock_file_content=lock_file_content,
            dep_name=upgrade.dep_name,
            current_value=upgrade.current_value,
            current_version=upgrade.current_version,
            new_version=upgrade.new_version,
            allow_parent_updates=True,
            allow_higher_or_removed=True,
        )
        result = await settle(update_locked_dependency(request))
        log.debug("Locked update of %s returned %s", upgrade.dep_name, result.status)

        if reusable:
            if upgrade.is_remediation and result.status is not LockedUpdateStatus.ALREADY_UPDATED:
                raise BranchRebaseRequired(f"remediation of {upgrade.dep_name} not applied")
            if result.status is LockedUpdateStatus.UPDATED:
                raise BranchRebaseRequired(f"{upgrade.dep_name} needs a lock file update")

        match result.status:
            case LockedUpdateStatus.UPDATED:
                for path, file_content in result.files.items():
                    if path == group.package_file:
                        content = file_content
                    else:
                        await self._workspace.write(path, file_content)
            case LockedUpdateStatus.ALREADY_UPDATED:
                self._arbiter.observe_already_updated(upgrade.dep_name)
            case LockedUpdateStatus.UNSUPPORTED | LockedUpdateStatus.UPDATE_FAILED:
                group.requires_artifacts = True
        return content

    async def _bump(self, group: FileGroup, handler: Handler, content: str | None) -> str | None:
        if handler.bump_package_version is None or content is None:
            return content
        for upgrade in group.upgrades:
            if upgrade.bump_version is None:
                continue
            result = await settle(
                handler.bump_package_version(
                    content, upgrade.package_file_version, upgrade.bump_version
                )
            )
            if result is not None and result.bumped_content is not None:
                log.debug("Bumped %s (%s)", group.package_file, upgrade.bump_version)
                content = result.bumped_content
        return content

    def _require_content(self, group: FileGroup, upgrade: Upgrade, content: str | None) -> str:
        if content is not None:
            return content
        if self._arbiter.assumes_reusable:
            raise BranchRebaseRequired(f"{group.package_file} missing on the branch")
        raise self._failure("Missing package file", group, upgrade)

    def _failure(self, message: str, group: FileGroup, upgrade: Upgrade) -> FileUpdateError:
        log.error(
            "%s for %s in %s",
            message,
            upgrade.dep_name or "<unnamed>",
            group.key,
        )
        return FileUpdateError(
            message,
            handler=group.handler,
            package_file=group.package_file,
            dep_name=upgrade.dep_name,
        )
