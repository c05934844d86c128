"""Error taxonomy for change-tracker.

Every error raised by the tracker is a ``ChangeTrackerError`` carrying an
``error_type`` tag and, where one exists, the underlying ``cause`` (also
chained as ``__cause__``).  History *load* failures are not part of the
taxonomy: a missing or corrupt history is treated as an empty one.
"""

from __future__ import annotations

from enum import StrEnum


class ChangeTrackerErrorType(StrEnum):
    """Kind of failure reported by the tracker."""

    HISTORY_PATH_NOT_SET = "HISTORY_PATH_NOT_SET"
    HISTORY_WRITE_ERROR = "HISTORY_WRITE_ERROR"
    INVALID_INPUT = "INVALID_INPUT"


class ChangeTrackerError(Exception):
    """Base class for all tracker errors."""

    error_type: ChangeTrackerErrorType

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class HistoryPathNotSetError(ChangeTrackerError):
    """Raised by any history-touching operation when no history path is configured."""

    error_type = ChangeTrackerErrorType.HISTORY_PATH_NOT_SET


class HistoryWriteError(ChangeTrackerError):
    """Raised when the history cannot be written or removed."""

    error_type = ChangeTrackerErrorType.HISTORY_WRITE_ERROR


class InvalidInputError(ChangeTrackerError):
    """Raised when a file record has no byte content to fingerprint."""

    error_type = ChangeTrackerErrorType.INVALID_INPUT

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
