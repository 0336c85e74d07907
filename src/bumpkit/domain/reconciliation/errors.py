"""Failures raised by the reconciliation core."""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base exception for reconciliation passes."""


class FileUpdateError(ReconciliationError):
    """Raised when an upgrade cannot be represented in the branch.

    The caller must not commit a partially reconciled branch.
    """

    def __init__(
        self,
        message: str,
        *,
        handler: str,
        package_file: str | None = None,
        dep_name: str | None = None,
    ) -> None:
        self.handler = handler
        self.package_file = package_file
        self.dep_name = dep_name
        super().__init__(
            f"{message}: handler={handler}, package_file={package_file}, dep_name={dep_name}"
        )


class InvalidUpgradeError(ReconciliationError, ValueError):
    """Raised when an upgrade violates a precondition of the reconciliation pass."""


class BranchRebaseRequired(Exception):  # noqa: N818
    """Internal signal: recompute the pass against the base branch.

    Only raised while the existing branch is assumed reusable and never
    escapes the engine.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
