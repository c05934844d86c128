"""Entry point for `python -m change_tracker`.

Usage:
    python -m change_tracker track ./content --history .cache/history.json
"""

from __future__ import annotations

from change_tracker.cli import cli

cli()
