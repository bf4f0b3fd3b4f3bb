"""Tests for the watchfiles watcher adapter."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from asset_catalog.cli.watch import watch_and_regenerate
from asset_catalog.config import CatalogKind, GeneratorConfig
from asset_catalog.watcher.watchfiles_adapter import WatchfilesWatcher


class TestIsRelevant:
    def test_regular_file(self, tmp_path: Path) -> None:
        watcher = WatchfilesWatcher(tmp_path, AsyncMock())
        assert watcher.is_relevant(tmp_path / "music" / "song.ogg") is True

    def test_excluded_subtree(self, tmp_path: Path) -> None:
        watcher = WatchfilesWatcher(tmp_path, AsyncMock())
        assert watcher.is_relevant(tmp_path / "originals" / "song.flac") is False

    def test_dotfile(self, tmp_path: Path) -> None:
        watcher = WatchfilesWatcher(tmp_path, AsyncMock())
        assert watcher.is_relevant(tmp_path / ".song.ogg.swp") is False

    def test_outside_root(self, tmp_path: Path) -> None:
        watcher = WatchfilesWatcher(tmp_path / "assets", AsyncMock())
        assert watcher.is_relevant(tmp_path / "src" / "assets.rs") is False


class TestWatchfilesWatcher:
    @pytest.mark.asyncio
    async def test_start_creates_task(self, tmp_path: Path) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher(tmp_path, callback)

        with patch("asset_catalog.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            assert watcher._task is not None
            await watcher.stop()
            assert watcher._task is None

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self, tmp_path: Path) -> None:
        watcher = WatchfilesWatcher(tmp_path, AsyncMock())
        await watcher.stop()

    @pytest.mark.asyncio
    async def test_double_start_is_noop(self, tmp_path: Path) -> None:
        watcher = WatchfilesWatcher(tmp_path, AsyncMock())

        with patch("asset_catalog.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            task1 = watcher._task
            await watcher.start()
            assert watcher._task is task1
            await watcher.stop()

    @pytest.mark.asyncio
    async def test_callback_receives_relevant_files(self, tmp_path: Path) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher(tmp_path, callback)
        changes = {
            (1, str(tmp_path / "menu1.wav")),
            (2, str(tmp_path / "originals" / "menu1.flac")),
            (1, str(tmp_path / ".DS_Store")),
        }

        with patch("asset_catalog.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_called_once()
        assert callback.call_args[0][0] == {tmp_path / "menu1.wav"}

    @pytest.mark.asyncio
    async def test_callback_not_called_for_ignored_only(self, tmp_path: Path) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher(tmp_path, callback)
        changes = {(1, str(tmp_path / ".git" / "index"))}

        with patch("asset_catalog.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_not_called()


@pytest.mark.asyncio
async def test_watch_and_regenerate_rewrites_output(tmp_path: Path, asset_tree: Path) -> None:
    output = tmp_path / "assets.rs"
    config = GeneratorConfig.for_kind(CatalogKind.ASSETS, root=asset_tree, output=output)
    (asset_tree / "new.png").write_bytes(b"\x89PNG")
    changes = {(1, str(asset_tree / "new.png"))}
    stop = asyncio.Event()

    with patch("asset_catalog.watcher.watchfiles_adapter.awatch") as mock_awatch:
        mock_awatch.return_value = _single_change_iter(changes)
        task = asyncio.create_task(watch_and_regenerate(config, stop))
        await asyncio.sleep(0.05)
        stop.set()
        await task

    assert "pub const new: Asset = Asset::Png(" in output.read_text(encoding="utf-8")


async def _empty_async_iter() -> AsyncIterator[Any]:
    """Async iterator that never yields, just blocks until cancelled."""
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
    yield  # make it an async generator  # pragma: no cover


async def _single_change_iter(changes: set[tuple[int, str]]) -> AsyncIterator[set[tuple[int, str]]]:
    """Async iterator that yields one set of changes then blocks."""
    yield changes
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
