from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine, Iterable
from pathlib import Path
from typing import Any

from watchfiles import Change, awatch

logger = logging.getLogger(__name__)


def _is_checked_file(path: Path, extensions: frozenset[str]) -> bool:
    return path.suffix.lower() in extensions


class WatchfilesWatcher:
    """Watch a directory for source-file edits and trigger a callback.

    Deleted files are ignored. The callback is awaited before the next batch
    of changes is read, so checks never overlap.

    Implements the ``FileWatcherPort`` protocol.
    """

    def __init__(
        self,
        directory: str | Path,
        on_change: Callable[[set[Path]], Coroutine[Any, Any, None]],
        extensions: Iterable[str],
    ) -> None:
        self._directory = Path(directory)
        self._on_change = on_change
        self._extensions = frozenset(e.lower() for e in extensions)
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
        async for changes in awatch(self._directory):
            paths = {
                Path(p)
                for change, p in changes
                if change != Change.deleted and _is_checked_file(Path(p), self._extensions)
            }
            if paths:
                logger.info("Detected changes in %d file(s)", len(paths))
                try:
                    await self._on_change(paths)
                except Exception:
                    logger.exception("Error in watcher callback")
