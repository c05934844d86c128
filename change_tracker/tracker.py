"""Fingerprint-based change tracker.

ChangeTracker decides, for a collection of in-memory file records, which
are new, modified or unchanged since the previous run by comparing content
fingerprints against a persisted history.

Per ``track_changes`` call:
    disabled -> every input is reported ``untracked``; the history store is
                never read or written.
    enabled  -> load history -> fingerprint inputs -> prune runtime state of
                absent paths -> reconcile -> save history -> return states.

Instances are not safe for overlapping calls: serialise calls per tracker.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from types import MappingProxyType

import structlog

from change_tracker.errors import ChangeTrackerError
from change_tracker.fingerprint import fingerprint_record
from change_tracker.models.config import ChangeTrackerConfig, ConfigUpdate
from change_tracker.models.states import FileChangeState, FileStatus, HasContents
from change_tracker.observability.logging import Logger
from change_tracker.observability.metrics import tracked_files_total, tracking_runs_total
from change_tracker.storage.filesystem import FileSystem
from change_tracker.storage.history import HistoryStore

_log = structlog.get_logger(component="tracker")


class ChangeTracker:
    """Tracks content changes of named file records across runs.

    Args:
        config:     Initial configuration snapshot.
        logger:     Logger for lifecycle events. Defaults to a structlog
                    logger bound with ``component="tracker"``.
        filesystem: Backend used by the history store. Defaults to the
                    local disk.
    """

    def __init__(
        self,
        config: ChangeTrackerConfig | None = None,
        logger: Logger | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        self._config = config or ChangeTrackerConfig()
        self._log = logger or _log
        self._history = HistoryStore(
            lambda: self._config.history_path,
            filesystem=filesystem,
            logger=self._log,
        )
        # path -> state of the most recent run
        self._states: dict[str, FileChangeState] = {}

    @property
    def config(self) -> ChangeTrackerConfig:
        """Current configuration snapshot."""
        return self._config

    async def track_changes(self, files: Mapping[str, HasContents]) -> Mapping[str, FileChangeState]:
        """Reconcile *files* against the history and return their states.

        Raises:
            HistoryPathNotSetError: tracking is enabled and no history path is set.
            InvalidInputError:      a record has no byte content; nothing is
                                    committed to history or runtime state.
            HistoryWriteError:      the new history could not be saved.  The
                                    runtime state of this run is already
                                    applied at that point.
        """
        self._log.debug("tracking_started", files=len(files))

        if not self._config.enabled:
            return self._mark_untracked(files)

        try:
            states = await self._track(files)
        except ChangeTrackerError:
            tracking_runs_total.labels(outcome="failed").inc()
            raise

        tracking_runs_total.labels(outcome="tracked").inc()
        for status, count in Counter(state.status for state in states.values()).items():
            tracked_files_total.labels(status=status.value).inc(count)
        return states

    async def _track(self, files: Mapping[str, HasContents]) -> Mapping[str, FileChangeState]:
        previous = await self._history.load()

        fingerprints = {path: fingerprint_record(path, record) for path, record in files.items()}
        self._log.debug("fingerprints_computed", files=len(fingerprints))

        for path in [p for p in self._states if p not in fingerprints]:
            self._log.debug("file_state_pruned", path=path)
            del self._states[path]

        for path, current in fingerprints.items():
            old = previous.get(path)
            if old is None:
                state = FileChangeState.new()
            elif old != current:
                state = FileChangeState.modified(old)
            else:
                state = FileChangeState.unchanged(old)
            self._log.debug(
                "file_state_set",
                path=path,
                status=state.status.value,
                previous=old,
                current=current,
            )
            self._states[path] = state

        await self._history.save(fingerprints)

        self._log.info("tracking_completed", files=len(fingerprints))
        return self._snapshot()

    def _mark_untracked(self, files: Mapping[str, HasContents]) -> Mapping[str, FileChangeState]:
        self._log.info("tracking_disabled", files=len(files))
        untracked = FileChangeState.untracked()
        result: dict[str, FileChangeState] = {}
        for path in files:
            self._states[path] = untracked
            result[path] = untracked
        tracking_runs_total.labels(outcome="disabled").inc()
        if result:
            tracked_files_total.labels(status=FileStatus.UNTRACKED.value).inc(len(result))
        return MappingProxyType(result)

    def get_file_state(self, path: str) -> FileChangeState | None:
        """Return the state of *path* from the latest run, or None."""
        return self._states.get(path)

    async def clear_history(self) -> None:
        """Delete the persisted history and forget all runtime state.

        The next ``track_changes`` call reports every file as new.

        Raises:
            HistoryPathNotSetError: no history path is set.
            HistoryWriteError:      the history file exists but could not be removed.
        """
        self._log.debug("history_clearing")
        await self._history.clear()
        self._states.clear()
        self._log.info("history_cleared")

    def enable(self, options: bool | ConfigUpdate | Mapping[str, object] | ChangeTrackerConfig) -> None:
        """Enable or disable tracking, or update the configuration.

        A bool only toggles ``enabled``.  A mapping is shallow-merged into the
        current configuration so unspecified fields are preserved.  A full
        ``ChangeTrackerConfig`` replaces the current one.
        """
        if isinstance(options, bool):
            self._config = self._config.apply({"enabled": options})
        elif isinstance(options, ChangeTrackerConfig):
            self._config = options
        else:
            unknown = ChangeTrackerConfig.unknown_keys(options)
            if unknown:
                self._log.warning("tracking_config_unknown_keys", keys=unknown)
            self._config = self._config.apply(options)

        self._log.info(
            "tracking_config_updated",
            enabled=self._config.enabled,
            history_path=self._config.history_path,
        )

    def _snapshot(self) -> Mapping[str, FileChangeState]:
        return MappingProxyType(dict(self._states))
