"""
Tests for the stats cache and its invalidation rules.
"""

import asyncio
import threading
import time

import pytest
from conftest import InMemorySource, make_items

from catalog_api.errors import SourceError
from catalog_api.services import StatsCache


@pytest.mark.asyncio
async def test_first_read_computes_snapshot(memory_source):
    cache = StatsCache.create(source=memory_source)
    assert cache.state == "empty"

    snapshot = await cache.get()

    assert snapshot.total == 3
    assert snapshot.average_price == 20
    assert cache.state == "valid"
    assert cache.entry.source_version == memory_source.version()
    assert memory_source.reads == 1


@pytest.mark.asyncio
async def test_repeated_reads_hit_cache(memory_source):
    cache = StatsCache.create(source=memory_source)

    first = await cache.get()
    second = await cache.get()
    third = await cache.get()

    assert first is second is third
    assert memory_source.reads == 1
    assert cache.metrics.hits == 2
    assert cache.metrics.misses == 1
    assert cache.metrics.hit_rate == pytest.approx(2 / 3)


@pytest.mark.asyncio
async def test_version_change_triggers_recompute_without_invalidate(memory_source):
    cache = StatsCache.create(source=memory_source)
    assert (await cache.get()).average_price == 20

    memory_source.write_items([*memory_source.items, *make_items([60])])

    snapshot = await cache.get()
    assert snapshot.total == 4
    assert snapshot.average_price == 30
    assert memory_source.reads == 2


@pytest.mark.asyncio
async def test_empty_collection_has_zero_average():
    cache = StatsCache.create(source=InMemorySource([]))

    snapshot = await cache.get()

    assert snapshot.total == 0
    assert snapshot.average_price == 0


@pytest.mark.asyncio
async def test_invalidate_empties_cache(memory_source):
    cache = StatsCache.create(source=memory_source)
    await cache.get()

    cache.invalidate()
    cache.invalidate()

    assert cache.state == "empty"
    assert cache.metrics.invalidations == 1

    await cache.get()
    assert memory_source.reads == 2


@pytest.mark.asyncio
async def test_failed_read_leaves_cache_empty(memory_source):
    cache = StatsCache.create(source=memory_source)
    memory_source.fail_reads = True

    with pytest.raises(SourceError):
        await cache.get()

    assert cache.state == "empty"
    assert cache.metrics.failures == 1

    memory_source.fail_reads = False
    assert (await cache.get()).total == 3


@pytest.mark.asyncio
async def test_failed_recompute_drops_previous_snapshot(memory_source):
    cache = StatsCache.create(source=memory_source)
    await cache.get()

    memory_source.touch()
    memory_source.fail_reads = True
    with pytest.raises(SourceError):
        await cache.get()

    assert cache.entry is None


@pytest.mark.asyncio
async def test_write_during_recompute_is_not_missed(memory_source):
    """The tag is the version seen before the read, so a write racing the
    read forces another recompute on the next call."""
    cache = StatsCache.create(source=memory_source)
    version_before_read = memory_source.version()

    def concurrent_write(source):
        source.before_read = None
        source.items = [*source.items, *make_items([60])]
        source.generation += 1

    memory_source.before_read = concurrent_write

    first = await cache.get()
    assert first.total == 4
    assert cache.entry.source_version == version_before_read

    second = await cache.get()
    assert second.total == 4
    assert memory_source.reads == 2
    assert cache.entry.source_version == memory_source.version()


@pytest.mark.asyncio
async def test_concurrent_readers_share_one_recompute(memory_source):
    cache = StatsCache.create(source=memory_source)

    results = await asyncio.gather(*(cache.get() for _ in range(10)))

    assert all(result == results[0] for result in results)
    assert memory_source.reads == 1


@pytest.mark.asyncio
async def test_cancelled_read_commits_nothing(memory_source):
    cache = StatsCache.create(source=memory_source)
    gate = threading.Event()
    memory_source.read_gate = gate

    task = asyncio.create_task(cache.get())
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    gate.set()

    assert cache.state == "empty"

    memory_source.read_gate = None
    assert (await cache.get()).total == 3
    assert cache.state == "valid"


@pytest.mark.asyncio
async def test_slow_source_times_out(memory_source):
    cache = StatsCache.create(source=memory_source, io_timeout=0.05)
    memory_source.before_read = lambda source: time.sleep(0.3)

    with pytest.raises(SourceError, match="Timed out"):
        await cache.get()

    assert cache.state == "empty"
