"""Public interface for the branch-config JSON adapter."""

from __future__ import annotations

from .schema import BranchConfigPayload, OutcomePayload, UpgradePayload
from .translator import (
    dump_outcome,
    load_branch_config,
    outcome_payload,
    parse_branch_config,
    parse_upgrade,
)

__all__ = [
    "BranchConfigPayload",
    "OutcomePayload",
    "UpgradePayload",
    "dump_outcome",
    "load_branch_config",
    "outcome_payload",
    "parse_branch_config",
    "parse_upgrade",
]
