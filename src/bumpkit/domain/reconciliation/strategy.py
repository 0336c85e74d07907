"""Edit-strategy selection for single upgrades.

The selector only consults which capabilities a handler exposes. Locked
updates are considered before content edits: a successful targeted lock file
update avoids a full regeneration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bumpkit.domain.model import UpgradeKind

from .contracts import EditStrategy

if TYPE_CHECKING:
    from bumpkit.domain.model import Upgrade
    from bumpkit.domain.ports.handlers import Handler


def select_strategy(upgrade: Upgrade, handler: Handler) -> EditStrategy:
    kind = upgrade.kind
    if kind is UpgradeKind.LOCKFILE_MAINTENANCE:
        return EditStrategy.LOCKFILE_MAINTENANCE
    if kind in (UpgradeKind.REMEDIATION, UpgradeKind.LOCKFILE_UPDATE):
        if handler.update_locked_dependency is not None:
            return EditStrategy.LOCKED_DEPENDENCY
        return EditStrategy.LOCKFILE_REGENERATION
    if handler.update_dependency is not None:
        return EditStrategy.DIRECT
    return EditStrategy.TEXT_REPLACEMENT


def replacement_texts(upgrade: Upgrade) -> tuple[str, str] | None:
    """Return the ``(old, new)`` text pair for a text replacement.

    ``replace_string`` is the exact text found in the file; when present the
    new text is derived from it by substituting the current value, and for
    replacements the dependency name.
    """

    target = upgrade.target_value
    if upgrade.replace_string is not None:
        new_text = upgrade.replace_string
        if upgrade.current_value and target is not None:
            new_text = new_text.replace(upgrade.current_value, target, 1)
        if upgrade.kind is UpgradeKind.REPLACEMENT and upgrade.dep_name and upgrade.new_name:
            new_text = new_text.replace(upgrade.dep_name, upgrade.new_name, 1)
        return upgrade.replace_string, new_text

    if upgrade.current_value is None or target is None:
        return None
    return upgrade.current_value, target
