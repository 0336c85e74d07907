from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from bumpkit.domain.model import BranchConfig
from bumpkit.domain.reconciliation import ReconciliationEngine
from bumpkit.domain.registry import HandlerRegistry
from tests.helpers.reconciliation import RecordingContentSource, ScriptedReplacer

if TYPE_CHECKING:
    from collections.abc import Callable

    from bumpkit.domain.ports.handlers import Handler


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "BUMPKIT_DATA_DIR",
        "BUMPKIT_LOG_LEVEL",
        "BUMPKIT_RAW_URL_TEMPLATE",
        "BUMPKIT_RAW_TOKEN",
        "BUMPKIT_RAW_DEFAULT_REF",
        "BUMPKIT_RAW_CACHE_BACKEND",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def source() -> RecordingContentSource:
    return RecordingContentSource()


@pytest.fixture
def replacer() -> ScriptedReplacer:
    return ScriptedReplacer()


@pytest.fixture
def branch_config() -> BranchConfig:
    return BranchConfig(base_branch="base-branch", branch_name="renovate/pin")


@pytest.fixture
def make_engine(
    source: RecordingContentSource,
    replacer: ScriptedReplacer,
) -> Callable[..., ReconciliationEngine]:
    def factory(*handlers: Handler) -> ReconciliationEngine:
        return ReconciliationEngine(
            source,
            handlers=HandlerRegistry(handlers),
            replace_text=replacer,
        )

    return factory
