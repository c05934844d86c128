"""Unit tests for HistoryStore load/save/clear over an in-memory filesystem."""

from __future__ import annotations

import json

import pytest

from change_tracker.errors import HistoryPathNotSetError, HistoryWriteError
from change_tracker.storage.history import HistoryStore
from tests.fakes import InMemoryFileSystem

_PATH = "state/history.json"


def _store(fs: InMemoryFileSystem, path: str = _PATH) -> HistoryStore:
    return HistoryStore(lambda: path, filesystem=fs)


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------


class TestLoad:
    async def test_missing_file_is_empty_history(self, memory_fs: InMemoryFileSystem) -> None:
        assert await _store(memory_fs).load() == {}

    async def test_reads_fingerprint_map(self, memory_fs: InMemoryFileSystem) -> None:
        memory_fs.files[_PATH] = json.dumps({"a.txt": "abc", "b.txt": "def"})
        assert await _store(memory_fs).load() == {"a.txt": "abc", "b.txt": "def"}

    @pytest.mark.parametrize(
        "content",
        [
            "invalid json",
            "",
            "[1, 2, 3]",
            '"just a string"',
            '{"a.txt": 5}',
            '{"a.txt": null}',
            "[" * 200_000,
        ],
    )
    async def test_malformed_history_is_empty(self, memory_fs: InMemoryFileSystem, content: str) -> None:
        """Anything other than a str -> str JSON object degrades to a fresh start."""
        memory_fs.files[_PATH] = content
        assert await _store(memory_fs).load() == {}

    async def test_read_error_is_empty_history(self, memory_fs: InMemoryFileSystem) -> None:
        memory_fs.failures["read_text"] = PermissionError("denied")
        assert await _store(memory_fs).load() == {}

    async def test_undecodable_history_is_empty(self, memory_fs: InMemoryFileSystem) -> None:
        async def _bad_read(path: str) -> str:
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        memory_fs.read_text = _bad_read  # type: ignore[method-assign]
        assert await _store(memory_fs).load() == {}

    async def test_unset_path_raises_without_io(self, memory_fs: InMemoryFileSystem) -> None:
        with pytest.raises(HistoryPathNotSetError):
            await _store(memory_fs, path="").load()
        assert memory_fs.calls == []


# ---------------------------------------------------------------------------
# save
# ---------------------------------------------------------------------------


class TestSave:
    async def test_writes_indented_sorted_json(self, memory_fs: InMemoryFileSystem) -> None:
        await _store(memory_fs).save({"b.txt": "2", "a.txt": "1"})
        assert memory_fs.files[_PATH] == '{\n  "a.txt": "1",\n  "b.txt": "2"\n}\n'

    async def test_creates_parent_directory_first(self, memory_fs: InMemoryFileSystem) -> None:
        await _store(memory_fs).save({"a.txt": "1"})
        assert memory_fs.calls == [("make_dirs", "state"), ("write_text", _PATH)]

    async def test_bare_filename_skips_directory_creation(self, memory_fs: InMemoryFileSystem) -> None:
        await _store(memory_fs, path="history.json").save({})
        assert memory_fs.calls == [("write_text", "history.json")]

    async def test_save_then_load_returns_same_map(self, memory_fs: InMemoryFileSystem) -> None:
        store = _store(memory_fs)
        await store.save({"x/y.md": "abc"})
        assert await store.load() == {"x/y.md": "abc"}

    @pytest.mark.parametrize("op", ["make_dirs", "write_text"])
    async def test_io_failure_wrapped(self, memory_fs: InMemoryFileSystem, op: str) -> None:
        cause = PermissionError("read-only")
        memory_fs.failures[op] = cause
        with pytest.raises(HistoryWriteError) as exc_info:
            await _store(memory_fs).save({"a.txt": "1"})
        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause

    async def test_unserialisable_fingerprint_wrapped(self, memory_fs: InMemoryFileSystem) -> None:
        """A fingerprint that json cannot encode is a write error, not a crash."""
        circular: dict[str, object] = {}
        circular["self"] = circular
        with pytest.raises(HistoryWriteError) as exc_info:
            await _store(memory_fs).save({"a.txt": circular})  # type: ignore[dict-item]
        assert isinstance(exc_info.value.cause, ValueError)
        assert _PATH not in memory_fs.files

    async def test_unset_path_raises_without_io(self, memory_fs: InMemoryFileSystem) -> None:
        with pytest.raises(HistoryPathNotSetError):
            await _store(memory_fs, path="").save({"a.txt": "1"})
        assert memory_fs.calls == []


# ---------------------------------------------------------------------------
# clear
# ---------------------------------------------------------------------------


class TestClear:
    async def test_removes_file(self, memory_fs: InMemoryFileSystem) -> None:
        memory_fs.files[_PATH] = "{}"
        await _store(memory_fs).clear()
        assert _PATH not in memory_fs.files

    async def test_missing_file_is_fine(self, memory_fs: InMemoryFileSystem) -> None:
        await _store(memory_fs).clear()
        await _store(memory_fs).clear()

    async def test_remove_failure_wrapped(self, memory_fs: InMemoryFileSystem) -> None:
        memory_fs.failures["remove"] = PermissionError("denied")
        with pytest.raises(HistoryWriteError, match="clear"):
            await _store(memory_fs).clear()

    async def test_unset_path_raises(self, memory_fs: InMemoryFileSystem) -> None:
        with pytest.raises(HistoryPathNotSetError, match="clear history"):
            await _store(memory_fs, path="").clear()
        assert memory_fs.calls == []


class TestPathProvider:
    async def test_path_read_on_every_call(self, memory_fs: InMemoryFileSystem) -> None:
        """The store follows the provider, so config updates apply immediately."""
        current = {"path": "one.json"}
        store = HistoryStore(lambda: current["path"], filesystem=memory_fs)
        await store.save({"a": "1"})
        current["path"] = "two.json"
        await store.save({"b": "2"})
        assert set(memory_fs.files) == {"one.json", "two.json"}
