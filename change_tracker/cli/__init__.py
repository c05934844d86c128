"""change-tracker command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``change-tracker`` script).
"""

from change_tracker.cli.main import cli

__all__ = ["cli"]
