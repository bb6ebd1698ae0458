from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine, Iterable
from pathlib import Path
from typing import Any

from watchfiles import awatch

from type_hoist.core.languages import is_supported_file

logger = logging.getLogger(__name__)


def _is_relevant(path: Path, root: Path, exclude_dirs: frozenset[str]) -> bool:
    if not is_supported_file(path):
        return False
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = path.parts
    return not exclude_dirs.intersection(parts)


class WatchfilesWatcher:
    """Watch a directory for TypeScript changes and trigger a callback.

    Implements the ``FileWatcherPort`` protocol.
    """

    def __init__(
        self,
        directory: str | Path,
        on_change: Callable[[set[Path]], Coroutine[Any, Any, None]],
        exclude_dirs: Iterable[str] = (),
    ) -> None:
        self._directory = Path(directory)
        self._on_change = on_change
        self._exclude_dirs = frozenset(exclude_dirs)
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watcher started for %s", self._directory)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Watcher stopped for %s", self._directory)

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    async def _watch(self) -> None:
        root = self._directory.resolve()
        async for changes in awatch(self._directory):
            paths = {Path(p) for _, p in changes if _is_relevant(Path(p), root, self._exclude_dirs)}
            paths = {p for p in paths if p.exists()}
            if paths:
                logger.info("Detected changes in %d file(s)", len(paths))
                try:
                    await self._on_change(paths)
                except Exception:
                    logger.exception("Error in watcher callback")
