"""Click commands for running the tracker over a directory tree."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import click

from change_tracker.config import load_config
from change_tracker.errors import ChangeTrackerError
from change_tracker.models.config import AppConfig
from change_tracker.models.states import FileRecord, FileStatus
from change_tracker.observability.logging import get_logger, setup_logging
from change_tracker.tracker import ChangeTracker

_LOG_LEVELS = click.Choice(["debug", "info", "warning", "error"], case_sensitive=False)
_LOG_FORMATS = click.Choice(["json", "console"], case_sensitive=False)


def collect_files(root: Path, pattern: str = "**/*", exclude: Path | None = None) -> dict[str, FileRecord]:
    """Read every regular file under *root* matching *pattern*.

    Keys are POSIX paths relative to *root*, sorted.  *exclude* (usually the
    history file itself) is skipped.
    """
    excluded = exclude.resolve() if exclude is not None else None
    files: dict[str, FileRecord] = {}
    for path in sorted(root.glob(pattern)):
        if not path.is_file():
            continue
        if excluded is not None and path.resolve() == excluded:
            continue
        files[path.relative_to(root).as_posix()] = FileRecord(path.read_bytes())
    return files


@click.group()
@click.option("--log-level", type=_LOG_LEVELS, default=None, help="Overrides CHANGE_TRACKER_LOG_LEVEL.")
@click.option("--log-format", type=_LOG_FORMATS, default=None, help="Overrides CHANGE_TRACKER_LOG_FORMAT.")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, log_format: str | None) -> None:
    """Report which files changed since the previous run."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="CHANGE_TRACKER_* environment") from exc
    setup_logging(log_level or config.log.level, log_format or config.log.format)
    ctx.obj = config


@cli.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--history", "history_path", type=click.Path(dir_okay=False), help="History file path.")
@click.option("--disable", is_flag=True, help="Report every file as untracked.")
@click.option("--pattern", default="**/*", show_default=True, help="Glob selecting files under ROOT.")
@click.option("--changed-only", is_flag=True, help="Omit unchanged files from the output.")
@click.pass_obj
def track(
    config: AppConfig,
    root: Path,
    history_path: str | None,
    disable: bool,
    pattern: str,
    changed_only: bool,
) -> None:
    """Track the files under ROOT and print their states as JSON."""
    tracker_config = config.tracker
    if history_path is not None:
        tracker_config = tracker_config.apply({"history_path": history_path})
    if disable:
        tracker_config = tracker_config.apply({"enabled": False})

    exclude = Path(tracker_config.history_path) if tracker_config.history_path else None
    files = collect_files(root, pattern, exclude=exclude)
    tracker = ChangeTracker(tracker_config, logger=get_logger("cli"))

    try:
        states = asyncio.run(tracker.track_changes(files))
    except ChangeTrackerError as exc:
        raise click.ClickException(str(exc)) from exc

    output = {
        path: state.to_dict()
        for path, state in states.items()
        if not (changed_only and state.status is FileStatus.UNCHANGED)
    }
    click.echo(json.dumps(output, indent=2, sort_keys=True))


@cli.command()
@click.option("--history", "history_path", type=click.Path(dir_okay=False), help="History file path.")
@click.pass_obj
def clear(config: AppConfig, history_path: str | None) -> None:
    """Delete the history so the next run reports every file as new."""
    tracker_config = config.tracker
    if history_path is not None:
        tracker_config = tracker_config.apply({"history_path": history_path})
    tracker = ChangeTracker(tracker_config, logger=get_logger("cli"))
    try:
        asyncio.run(tracker.clear_history())
    except ChangeTrackerError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"History cleared: {tracker_config.history_path}")
