"""Configuration data structures."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import TypedDict


def parse_bool(value: object) -> bool:
    """Interpret "true"/"1"/"yes" (any case) as True; other strings are False."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


class ConfigUpdate(TypedDict, total=False):
    """Partial tracker configuration accepted by ``ChangeTracker.enable``."""

    history_path: str
    enabled: bool


@dataclass(frozen=True)
class ChangeTrackerConfig:
    """Change tracker configuration.

    Immutable: updates go through ``apply`` which returns a new snapshot.
    """

    history_path: str = ""
    enabled: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.history_path, os.PathLike):
            object.__setattr__(self, "history_path", os.fspath(self.history_path))
        if not isinstance(self.enabled, bool):
            object.__setattr__(self, "enabled", parse_bool(self.enabled))

    def apply(self, update: Mapping[str, object]) -> ChangeTrackerConfig:
        """Return a copy with the known keys of *update* shallow-merged in.

        Unknown keys are dropped; callers that care can compare against
        ``unknown_keys``.
        """
        known = {k: v for k, v in update.items() if k in _FIELD_NAMES}
        return replace(self, **known)  # type: ignore[arg-type]

    @staticmethod
    def unknown_keys(update: Mapping[str, object]) -> list[str]:
        return sorted(k for k in update if k not in _FIELD_NAMES)


_FIELD_NAMES = frozenset(f.name for f in fields(ChangeTrackerConfig))


@dataclass(frozen=True)
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"


@dataclass(frozen=True)
class AppConfig:
    """Top-level configuration for the command-line entry point."""

    tracker: ChangeTrackerConfig = field(default_factory=ChangeTrackerConfig)
    log: LogConfig = field(default_factory=LogConfig)
