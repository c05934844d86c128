"""change-tracker: fingerprint-based change detection for build pipelines."""

from change_tracker.errors import (
    ChangeTrackerError,
    ChangeTrackerErrorType,
    HistoryPathNotSetError,
    HistoryWriteError,
    InvalidInputError,
)
from change_tracker.fingerprint import compute_fingerprint
from change_tracker.models import (
    ChangeTrackerConfig,
    ConfigUpdate,
    FileChangeState,
    FileRecord,
    FileStatus,
    HasContents,
)
from change_tracker.tracker import ChangeTracker

__version__ = "0.1.1"

__all__ = [
    "ChangeTracker",
    "ChangeTrackerConfig",
    "ChangeTrackerError",
    "ChangeTrackerErrorType",
    "ConfigUpdate",
    "FileChangeState",
    "FileRecord",
    "FileStatus",
    "HasContents",
    "HistoryPathNotSetError",
    "HistoryWriteError",
    "InvalidInputError",
    "__version__",
    "compute_fingerprint",
]
