"""Tests for the watchfiles watcher adapter."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from type_hoist.watcher.watchfiles_adapter import WatchfilesWatcher, _is_relevant


class TestIsRelevant:
    def test_typescript_file(self) -> None:
        assert _is_relevant(Path("/repo/src/a.ts"), Path("/repo"), frozenset()) is True

    def test_tsx_file(self) -> None:
        assert _is_relevant(Path("/repo/src/App.tsx"), Path("/repo"), frozenset()) is True

    def test_javascript_file(self) -> None:
        assert _is_relevant(Path("/repo/src/a.js"), Path("/repo"), frozenset()) is False

    def test_excluded_directory(self) -> None:
        path = Path("/repo/node_modules/pkg/a.ts")
        assert _is_relevant(path, Path("/repo"), frozenset({"node_modules"})) is False

    def test_excluded_name_above_root_is_ignored(self) -> None:
        path = Path("/home/build/project/src/a.ts")
        assert _is_relevant(path, Path("/home/build/project"), frozenset({"build"})) is True


class TestWatchfilesWatcher:
    def test_implements_protocol(self) -> None:
        from type_hoist.core.ports.watcher import FileWatcherPort

        callback = AsyncMock()
        watcher: FileWatcherPort = WatchfilesWatcher("/tmp", callback)
        assert hasattr(watcher, "start")
        assert hasattr(watcher, "stop")
        assert hasattr(watcher, "wait")

    @pytest.mark.asyncio
    async def test_start_creates_task(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        with patch("type_hoist.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            assert watcher._task is not None
            await watcher.stop()
            assert watcher._task is None

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)
        await watcher.stop()

    @pytest.mark.asyncio
    async def test_callback_receives_existing_typescript_files(self, tmp_path: Path) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher(tmp_path, callback, exclude_dirs={"node_modules"})
        kept = tmp_path / "a.ts"
        kept.write_text("let x = 1;", encoding="utf-8")
        (tmp_path / "node_modules").mkdir()
        excluded = tmp_path / "node_modules" / "b.ts"
        excluded.write_text("", encoding="utf-8")
        other = tmp_path / "c.js"
        other.write_text("", encoding="utf-8")

        changes = {(1, str(kept)), (1, str(excluded)), (2, str(other)), (3, str(tmp_path / "deleted.ts"))}

        with patch("type_hoist.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_called_once()
        assert callback.call_args[0][0] == {kept}

    @pytest.mark.asyncio
    async def test_callback_errors_are_logged(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        callback = AsyncMock(side_effect=RuntimeError("boom"))
        watcher = WatchfilesWatcher(tmp_path, callback)
        changed = tmp_path / "a.ts"
        changed.write_text("", encoding="utf-8")

        with patch("type_hoist.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter({(1, str(changed))})
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        assert "Error in watcher callback" in caplog.text


async def _empty_async_iter() -> AsyncIterator[Any]:
    """Async iterator that never yields, just blocks until cancelled."""
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
    yield  # pragma: no cover


async def _single_change_iter(changes: set[tuple[int, str]]) -> AsyncIterator[set[tuple[int, str]]]:
    """Async iterator that yields one set of changes then blocks."""
    yield changes
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
