"""Background watch on the collection source.

Polls the source version and invalidates the stats cache when it moves.
This only frees stale snapshots early; the cache compares versions on
every read regardless.
"""

import asyncio
import logging

from catalog_api.config import settings
from catalog_api.entities.cache_entry import SourceVersion
from catalog_api.errors import SourceError
from catalog_api.protocols import CollectionSource
from catalog_api.services.stats_cache import StatsCache
from catalog_api.utils import run_blocking

logger = logging.getLogger(__name__)


class SourceWatcher:
    """Poll a collection source and invalidate a stats cache on change."""

    def __init__(
        self,
        source: CollectionSource,
        cache: StatsCache,
        interval: float | None = None,
        io_timeout: float | None = None,
    ) -> None:
        """Initialize the watcher.

        Args:
            source: Collection source to poll.
            cache: Cache to invalidate.
            interval: Seconds between polls. Defaults to settings.
            io_timeout: Seconds allowed per poll. Defaults to settings.
        """
        self._source = source
        self._cache = cache
        self._interval = interval or settings.watch_interval
        self._io_timeout = io_timeout or settings.io_timeout
        self._last_version: SourceVersion | None = None
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start polling in a background task. No-op if already running."""
        if self.is_running:
            return
        self._last_version = await self._current_version()
        self._task = asyncio.create_task(self._run(), name="stats-source-watcher")
        logger.info("Watching collection source every %.2fs", self._interval)

    async def stop(self) -> None:
        """Cancel the polling task and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Stopped watching collection source")

    async def poll_once(self) -> bool:
        """Compare the source version with the last one seen.

        Returns:
            True if a change was detected and the cache invalidated
        """
        version = await self._current_version()
        if version == self._last_version:
            return False
        logger.info("Collection source changed: %s -> %s", self._last_version, version)
        self._last_version = version
        self._cache.invalidate()
        return True

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            await self.poll_once()

    async def _current_version(self) -> SourceVersion | None:
        try:
            return await run_blocking(self._source.version, timeout=self._io_timeout)
        except SourceError as e:
            logger.warning("Source watch could not read version: %s", e)
            return None

    @property
    def is_running(self) -> bool:
        """Whether the polling task is alive."""
        return self._task is not None and not self._task.done()
