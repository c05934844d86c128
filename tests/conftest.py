"""Shared fixtures for change-tracker tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from change_tracker.models.config import ChangeTrackerConfig
from change_tracker.tracker import ChangeTracker
from tests.fakes import InMemoryFileSystem

HISTORY_PATH = "cache/history.json"


@pytest.fixture(autouse=True)
def _quiet_structlog() -> Iterator[None]:
    """Route structlog output nowhere and never cache loggers across tests."""
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer()],
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def memory_fs() -> InMemoryFileSystem:
    return InMemoryFileSystem()


@pytest.fixture
def tracker(memory_fs: InMemoryFileSystem) -> ChangeTracker:
    """Enabled tracker over the in-memory filesystem."""
    return ChangeTracker(ChangeTrackerConfig(history_path=HISTORY_PATH), filesystem=memory_fs)


@pytest.fixture
def history_path(tmp_path: Path) -> Path:
    """History file location inside a per-test temporary directory."""
    return tmp_path / "state" / "history.json"
