"""History persistence for change-tracker.

Submodules:
    filesystem -- FileSystem ABC and the LocalFileSystem backend.
    history    -- HistoryStore: load/save/clear of the fingerprint map.
"""

from change_tracker.storage.filesystem import FileSystem, LocalFileSystem
from change_tracker.storage.history import HistoryStore

__all__ = ["FileSystem", "HistoryStore", "LocalFileSystem"]
