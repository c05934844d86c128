"""Persisted fingerprint history.

The history is a UTF-8 JSON object mapping logical file paths to their
fingerprints as of the last successful tracking run.  It is rewritten in
full on every save; entries for paths absent from a run are dropped, never
carried forward.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Mapping

import structlog

from change_tracker.errors import HistoryPathNotSetError, HistoryWriteError
from change_tracker.observability.logging import Logger
from change_tracker.observability.metrics import history_write_errors_total
from change_tracker.storage.filesystem import FileSystem, LocalFileSystem

_log = structlog.get_logger(component="storage.history")


class HistoryStore:
    """Loads, saves and clears the fingerprint history.

    The history path is read through *path_provider* on every call so a
    configuration update on the owning tracker takes effect immediately.

    Args:
        path_provider: Returns the current history path ("" when unset).
        filesystem:    Backend for file access. Defaults to LocalFileSystem.
        logger:        Logger for lifecycle events.
    """

    def __init__(
        self,
        path_provider: Callable[[], str],
        filesystem: FileSystem | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._path_provider = path_provider
        self._fs = filesystem or LocalFileSystem()
        self._log = logger or _log

    def _require_path(self, action: str) -> str:
        path = self._path_provider()
        if not path:
            self._log.error("history_path_not_set", action=action)
            raise HistoryPathNotSetError(f"History path must be set to {action}")
        return path

    async def load(self) -> dict[str, str]:
        """Return the persisted fingerprints, or {} when there is no usable history.

        Only a missing history path raises; an absent, unreadable or
        malformed file is a fresh start.
        """
        path = self._require_path("track changes")
        self._log.debug("history_loading", path=path)
        try:
            content = await self._fs.read_text(path)
        except FileNotFoundError:
            self._log.debug("history_missing", path=path)
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            self._log.debug("history_unreadable", path=path, error=str(exc))
            return {}

        try:
            data = json.loads(content)
        except (ValueError, RecursionError) as exc:
            self._log.debug("history_malformed", path=path, error=str(exc))
            return {}

        if not _is_fingerprint_map(data):
            self._log.debug("history_malformed", path=path, error="not a path to fingerprint mapping")
            return {}

        self._log.debug("history_loaded", path=path, entries=len(data))
        return dict(data)

    async def save(self, fingerprints: Mapping[str, str]) -> None:
        """Replace the persisted history with *fingerprints*.

        Raises HistoryWriteError if the directory, serialisation or write
        step fails.
        """
        path = self._require_path("track changes")
        self._log.debug("history_saving", path=path, entries=len(fingerprints))
        try:
            payload = json.dumps(dict(fingerprints), indent=2, sort_keys=True) + "\n"
            parent = os.path.dirname(path)
            if parent:
                await self._fs.make_dirs(parent)
            await self._fs.write_text(path, payload)
        except (OSError, TypeError, ValueError) as exc:
            history_write_errors_total.labels(operation="save").inc()
            self._log.error("history_save_failed", path=path, error=str(exc))
            raise HistoryWriteError("Failed to save change history", cause=exc) from exc
        self._log.debug("history_saved", path=path)

    async def clear(self) -> None:
        """Delete the persisted history.  Idempotent."""
        path = self._require_path("clear history")
        try:
            await self._fs.remove(path)
        except OSError as exc:
            history_write_errors_total.labels(operation="clear").inc()
            self._log.error("history_clear_failed", path=path, error=str(exc))
            raise HistoryWriteError("Failed to clear change history", cause=exc) from exc


def _is_fingerprint_map(data: object) -> bool:
    return isinstance(data, dict) and all(
        isinstance(key, str) and isinstance(value, str) for key, value in data.items()
    )
