"""File change status and per-file state data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


class FileStatus(StrEnum):
    """Change status assigned to a file by a tracking run."""

    NEW = "new"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"
    UNTRACKED = "untracked"


# Statuses that always carry the fingerprint recorded by the previous run.
_WITH_PREVIOUS = frozenset({FileStatus.MODIFIED, FileStatus.UNCHANGED})


class HasContents(Protocol):
    """Anything exposing raw byte content under ``contents``."""

    @property
    def contents(self) -> bytes: ...


@dataclass(frozen=True)
class FileRecord:
    """Minimal in-memory file payload accepted by the tracker."""

    contents: bytes


@dataclass(frozen=True)
class FileChangeState:
    """Result of reconciling one file against the persisted history.

    ``previous_fingerprint`` is set for MODIFIED and UNCHANGED and is None for
    NEW and UNTRACKED.  Any other combination is rejected at construction.
    """

    status: FileStatus
    previous_fingerprint: str | None = None

    def __post_init__(self) -> None:
        requires_previous = self.status in _WITH_PREVIOUS
        if requires_previous and self.previous_fingerprint is None:
            raise ValueError(f"previous_fingerprint is required for status {self.status.value!r}")
        if not requires_previous and self.previous_fingerprint is not None:
            raise ValueError(f"previous_fingerprint must be None for status {self.status.value!r}")

    @classmethod
    def new(cls) -> FileChangeState:
        return cls(FileStatus.NEW)

    @classmethod
    def modified(cls, previous_fingerprint: str) -> FileChangeState:
        return cls(FileStatus.MODIFIED, previous_fingerprint)

    @classmethod
    def unchanged(cls, previous_fingerprint: str) -> FileChangeState:
        return cls(FileStatus.UNCHANGED, previous_fingerprint)

    @classmethod
    def untracked(cls) -> FileChangeState:
        return cls(FileStatus.UNTRACKED)

    def to_dict(self) -> dict[str, str | None]:
        """Serialise to a plain dict for JSON output."""
        return {
            "status": self.status.value,
            "previous_fingerprint": self.previous_fingerprint,
        }
