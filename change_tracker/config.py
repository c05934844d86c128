"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from change_tracker.models.config import AppConfig, ChangeTrackerConfig, LogConfig, parse_bool


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"CHANGE_TRACKER_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    return parse_bool(_env(key, str(default).lower()))


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    valid = {"json", "console"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log format: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> AppConfig:
    """Load configuration from CHANGE_TRACKER_* environment variables."""
    return AppConfig(
        tracker=ChangeTrackerConfig(
            history_path=_env("HISTORY_PATH", ""),
            enabled=_env_bool("ENABLED", True),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
