from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine, Iterable
from pathlib import Path, PurePosixPath
from typing import Any

from watchfiles import awatch

from asset_catalog.config import DEFAULT_EXCLUDE
from asset_catalog.core.scanner import TreeScanner

logger = logging.getLogger(__name__)


class WatchfilesWatcher:
    """Watch a catalog root and trigger a callback with the relevant changed paths.

    Changes under excluded subtrees or dot-entries are ignored.
    """

    def __init__(
        self,
        directory: str | Path,
        on_change: Callable[[set[Path]], Coroutine[Any, Any, None]],
        exclude: Iterable[str] = DEFAULT_EXCLUDE,
    ) -> None:
        self._directory = Path(directory)
        self._on_change = on_change
        self._scanner = TreeScanner(self._directory, exclude)
        self._task: asyncio.Task[None] | None = None

    def is_relevant(self, path: Path) -> bool:
        try:
            relative = path.resolve().relative_to(self._directory.resolve())
        except ValueError:
            return False
        return not self._scanner.is_excluded(PurePosixPath(relative.as_posix()))

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

    async def _watch(self) -> None:
        async for changes in awatch(self._directory):
            paths = {Path(p) for _, p in changes if self.is_relevant(Path(p))}
            if paths:
                logger.info("Detected changes in %d file(s)", len(paths))
                try:
                    await self._on_change(paths)
                except Exception:
                    logger.exception("Error in watcher callback")
