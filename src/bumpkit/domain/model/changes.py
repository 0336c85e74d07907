"""File-level results produced by one reconciliation pass."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import FileChangeType


@dataclass(frozen=True, slots=True, kw_only=True)
class FileChange:
    """A file to write to (or remove from) the update branch."""

    path: str
    contents: str | bytes | None = None
    type: FileChangeType = FileChangeType.ADDITION

    def __post_init__(self) -> None:
        if self.type is FileChangeType.ADDITION and self.contents is None:
            raise ValueError(f"File addition for {self.path} must carry contents")

    @classmethod
    def deletion(cls, path: str) -> FileChange:
        return cls(path=path, type=FileChangeType.DELETION)

    def matches(self, content: str | None) -> bool:
        """Whether applying this change to ``content`` would leave it as is.

        Text content is compared as UTF-8 against binary contents.
        """

        if self.type is FileChangeType.DELETION or content is None:
            return self.contents is None and content is None
        if isinstance(self.contents, bytes):
            return self.contents == content.encode("utf-8")
        return self.contents == content


@dataclass(frozen=True, slots=True, kw_only=True)
class ArtifactError:
    """Failure reported by a handler while regenerating one lock file."""

    lock_file: str | None = None
    stderr: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ArtifactNotice:
    """Informational message a handler attaches to one file."""

    file: str
    message: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ArtifactResult:
    """One entry returned by a handler's artifact generation.

    Any combination of the three parts may be present; each part lands in its
    own list of the reconciliation outcome.
    """

    file: FileChange | None = None
    artifact_error: ArtifactError | None = None
    notice: ArtifactNotice | None = None
