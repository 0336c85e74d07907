"""Upgrade-to-file reconciliation.

Layered flow of one pass:
1. ``group``: partition upgrades into file groups and validate preconditions
2. ``strategy``: pick the edit strategy per upgrade from handler capabilities
3. ``content``: fold each group's upgrades over its file content
4. ``artifacts``: invoke artifact generation once per eligible group
5. ``outcome``: aggregate results and arbitrate branch reuse

``engine`` drives the stages and restarts the pass against the base branch
when the existing branch turns out to be stale.
"""

from __future__ import annotations

from .artifacts import ArtifactInvoker, artifact_order, resolve_lock_files
from .content import ContentReconciler
from .contracts import EditStrategy, GroupKey
from .engine import ReconciliationEngine
from .errors import FileUpdateError, InvalidUpgradeError, ReconciliationError
from .group import FileGroup, group_upgrades, validate_upgrades
from .outcome import BranchReuseArbiter, OutcomeCollector, ReconciliationOutcome
from .strategy import replacement_texts, select_strategy
from .workspace import BranchWorkspace

__all__ = [
    "ArtifactInvoker",
    "BranchReuseArbiter",
    "BranchWorkspace",
    "ContentReconciler",
    "EditStrategy",
    "FileGroup",
    "FileUpdateError",
    "GroupKey",
    "InvalidUpgradeError",
    "OutcomeCollector",
    "ReconciliationEngine",
    "ReconciliationError",
    "ReconciliationOutcome",
    "artifact_order",
    "group_upgrades",
    "replacement_texts",
    "resolve_lock_files",
    "select_strategy",
    "validate_upgrades",
]
