"""Filesystem access for the history store.

FileSystem      -- ABC of the four primitives the history store needs.
LocalFileSystem -- Local disk implementation; blocking calls run in the
                   default thread-pool executor so the event loop is never
                   blocked.

Implementations raise the standard ``OSError`` subclasses
(``FileNotFoundError``, ``PermissionError``, ...) so callers can rely on
POSIX-like error semantics regardless of backend.
"""

from __future__ import annotations

import asyncio
import os
import stat
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path


class FileSystem(ABC):
    """Abstract filesystem used by ``HistoryStore``."""

    @abstractmethod
    async def read_text(self, path: str) -> str:
        """Return the UTF-8 decoded content of *path*."""

    @abstractmethod
    async def write_text(self, path: str, data: str) -> None:
        """Replace the content of *path* with *data* (UTF-8)."""

    @abstractmethod
    async def make_dirs(self, path: str) -> None:
        """Create directory *path* and any missing parents."""

    @abstractmethod
    async def remove(self, path: str) -> None:
        """Delete *path*.  A missing file is not an error."""


class LocalFileSystem(FileSystem):
    """Local disk backend.

    ``write_text`` writes to a temporary file in the target directory and
    renames it over the target, so readers see either the old or the new
    content.  The replacement keeps the existing file's mode, or follows the
    umask for a new file.
    """

    async def read_text(self, path: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_sync, path)

    async def write_text(self, path: str, data: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write_sync, path, data)

    async def make_dirs(self, path: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._make_dirs_sync, path)

    async def remove(self, path: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._remove_sync, path)

    @staticmethod
    def _read_sync(path: str) -> str:
        return Path(path).read_text(encoding="utf-8")

    @staticmethod
    def _write_sync(path: str, data: str) -> None:
        target = Path(path)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
        try:
            os.chmod(tmp_name, _target_mode(target))
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(data)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @staticmethod
    def _make_dirs_sync(path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _remove_sync(path: str) -> None:
        Path(path).unlink(missing_ok=True)


def _target_mode(target: Path) -> int:
    """Mode for a replacement of *target*: its current mode, else 0o666 minus the umask."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
