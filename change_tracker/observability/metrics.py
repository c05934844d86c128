"""Prometheus counters for tracking runs."""

from __future__ import annotations

from prometheus_client import Counter

tracking_runs_total = Counter(
    "change_tracker_runs_total",
    "Tracking runs by outcome (tracked, disabled, failed).",
    ["outcome"],
)

tracked_files_total = Counter(
    "change_tracker_files_total",
    "Files reported by tracking runs, by status.",
    ["status"],
)

history_write_errors_total = Counter(
    "change_tracker_history_write_errors_total",
    "Failed history writes, by operation (save, clear).",
    ["operation"],
)
