"""Core data structures for change-tracker."""

from change_tracker.models.config import AppConfig, ChangeTrackerConfig, ConfigUpdate, LogConfig
from change_tracker.models.states import FileChangeState, FileRecord, FileStatus, HasContents

__all__ = [
    "AppConfig",
    "ChangeTrackerConfig",
    "ConfigUpdate",
    "FileChangeState",
    "FileRecord",
    "FileStatus",
    "HasContents",
    "LogConfig",
]
