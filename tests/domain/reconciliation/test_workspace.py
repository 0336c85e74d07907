from __future__ import annotations

import asyncio

from bumpkit.domain.model import FileChange
from bumpkit.domain.reconciliation import BranchWorkspace
from tests.helpers.reconciliation import RecordingContentSource


class _AsyncSource:
    def __init__(self, files: dict[str, str]) -> None:
        self.files = files

    async def get_file(self, path: str, *, branch: str | None = None) -> str | None:
        await asyncio.sleep(0)
        return self.files.get(path)


def test_each_path_is_fetched_once() -> None:
    source = RecordingContentSource()
    workspace = BranchWorkspace(source, "main")

    async def scenario() -> None:
        await workspace.original("a.txt")
        await workspace.current("a.txt")
        await workspace.write("a.txt", "changed")
        await workspace.current("a.txt")

    asyncio.run(scenario())

    assert source.calls == [("a.txt", "main")]


def test_write_equal_to_original_is_dropped() -> None:
    workspace = BranchWorkspace(RecordingContentSource(), "main")

    async def scenario() -> tuple[bool, bool]:
        changed = await workspace.write("a.txt", "changed")
        reverted = await workspace.write("a.txt", "existing content")
        return changed, reverted

    changed, reverted = asyncio.run(scenario())

    assert changed is True
    assert reverted is False
    assert workspace.updated_files() == []
    assert not workspace.is_updated("a.txt")


def test_updated_files_keep_write_order() -> None:
    workspace = BranchWorkspace(_AsyncSource({"a": "1", "b": "2"}), None)

    async def scenario() -> None:
        await workspace.write("b", "two")
        await workspace.write("a", "one")

    asyncio.run(scenario())

    assert workspace.updated_files() == [
        FileChange(path="b", contents="two"),
        FileChange(path="a", contents="one"),
    ]


def test_missing_path_reads_as_none() -> None:
    workspace = BranchWorkspace(_AsyncSource({}), None)

    assert asyncio.run(workspace.current("absent")) is None
    assert asyncio.run(workspace.current(None)) is None
