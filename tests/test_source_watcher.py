"""
Tests for the background source watcher.
"""

import asyncio

import pytest

from catalog_api.repositories import JsonFileCollectionSource
from catalog_api.services import SourceWatcher, StatsCache


@pytest.mark.asyncio
async def test_poll_detects_change_and_invalidates(memory_source):
    cache = StatsCache.create(source=memory_source)
    watcher = SourceWatcher(source=memory_source, cache=cache, interval=60)
    await watcher.start()
    try:
        await cache.get()
        assert await watcher.poll_once() is False
        assert cache.state == "valid"

        memory_source.touch()

        assert await watcher.poll_once() is True
        assert cache.state == "empty"
        assert await watcher.poll_once() is False
    finally:
        await watcher.stop()


@pytest.mark.asyncio
async def test_background_task_invalidates(memory_source):
    cache = StatsCache.create(source=memory_source)
    watcher = SourceWatcher(source=memory_source, cache=cache, interval=0.01)
    await watcher.start()
    try:
        await cache.get()
        memory_source.touch()

        for _ in range(100):
            if cache.state == "empty":
                break
            await asyncio.sleep(0.01)

        assert cache.state == "empty"
        assert cache.metrics.invalidations == 1
    finally:
        await watcher.stop()


@pytest.mark.asyncio
async def test_start_and_stop_are_idempotent(memory_source):
    watcher = SourceWatcher(source=memory_source, cache=StatsCache.create(source=memory_source), interval=60)

    await watcher.start()
    await watcher.start()
    assert watcher.is_running

    await watcher.stop()
    await watcher.stop()
    assert not watcher.is_running


@pytest.mark.asyncio
async def test_missing_file_does_not_stop_watching(tmp_path):
    path = tmp_path / "items.json"
    source = JsonFileCollectionSource(path)
    cache = StatsCache.create(source=source)
    watcher = SourceWatcher(source=source, cache=cache, interval=60)

    await watcher.start()
    try:
        assert await watcher.poll_once() is False

        source.write_items([])
        assert await watcher.poll_once() is True
        assert (await cache.get()).total == 0
    finally:
        await watcher.stop()
