"""Stats cache with version-checked invalidation.

The cache holds at most one snapshot, tagged with the collection source
version observed *before* the content was read. Every read compares that
tag with the current version, so a stale snapshot is never returned even
if no one calls ``invalidate()``. Explicit invalidation (from the source
watcher or a notifier) only frees the entry earlier.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

from catalog_api.config import settings
from catalog_api.entities import CacheEntryEntity, StatsSnapshotEntity
from catalog_api.errors import SourceError
from catalog_api.models import CacheMetrics
from catalog_api.protocols import CollectionSource
from catalog_api.utils import run_blocking

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StatsCache:
    """Lazily recomputed aggregate over the item collection.

    States:
        empty: no entry; the next ``get()`` recomputes
        valid: entry present; returned while its version matches the source

    Example:
        ```python
        cache = StatsCache.create(source=JsonFileCollectionSource.create())
        snapshot = await cache.get()
        cache.invalidate()
        ```
    """

    def __init__(self, source: CollectionSource, io_timeout: float | None = None) -> None:
        """Initialize the stats cache.

        Args:
            source: Collection the stats are computed from (required).
            io_timeout: Seconds allowed per source call. Defaults to settings.
        """
        self._source = source
        self._io_timeout = io_timeout or settings.io_timeout
        self._entry: CacheEntryEntity | None = None
        self._lock = asyncio.Lock()
        self._metrics = CacheMetrics()

    @classmethod
    def create(cls, source: CollectionSource, io_timeout: float | None = None) -> "StatsCache":
        """Factory method to create StatsCache with sensible defaults.

        Args:
            source: Collection source (required).
            io_timeout: Per-call I/O timeout. If None, uses settings.

        Returns:
            Configured StatsCache instance
        """
        return cls(source=source, io_timeout=io_timeout)

    async def get(self) -> StatsSnapshotEntity:
        """Return stats reflecting the source at or after the time of the call.

        Returns:
            The cached snapshot if the source is unchanged, otherwise a
            freshly computed one

        Raises:
            SourceError: If the source cannot be inspected or read. The
                cache is left empty.
        """
        version = await self._read(self._source.version)
        entry = self._entry
        if entry is not None and entry.source_version == version:
            self._metrics.record_hit()
            return entry.snapshot

        self._metrics.record_miss()

        # Single-flight: readers arriving during a recompute wait here and
        # reuse its result if the source did not move in the meantime.
        async with self._lock:
            version = await self._read(self._source.version)
            entry = self._entry
            if entry is not None and entry.source_version == version:
                return entry.snapshot

            self._entry = None
            items = await self._read(self._source.read_items)
            snapshot = StatsSnapshotEntity.from_items(items)
            self._entry = CacheEntryEntity(snapshot=snapshot, source_version=version)
            self._metrics.record_recompute()
            logger.debug("Stats recomputed at version %s: %s", version, snapshot)
            return snapshot

    async def _read(self, func: Callable[[], T]) -> T:
        """Run one source call; on failure leave the cache empty."""
        try:
            return await run_blocking(func, timeout=self._io_timeout)
        except SourceError as e:
            self._entry = None
            self._metrics.record_failure()
            logger.warning("Stats source read failed, cache left empty: %s", e)
            raise

    def invalidate(self) -> None:
        """Drop the cached snapshot, if any."""
        if self._entry is not None:
            self._entry = None
            self._metrics.record_invalidation()
            logger.info("Stats cache invalidated")

    @property
    def state(self) -> str:
        """Current cache state: ``"empty"`` or ``"valid"``."""
        return "empty" if self._entry is None else "valid"

    @property
    def entry(self) -> CacheEntryEntity | None:
        """Get the current cache entry (for testing)."""
        return self._entry

    @property
    def metrics(self) -> CacheMetrics:
        """Get cache activity counters."""
        return self._metrics
