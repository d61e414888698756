"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Settings stored in app.state by the app factory
    - Services built from those settings during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from catalog_api.config import Settings, get_redis_client
from catalog_api.handlers import ItemHandler, StatsHandler
from catalog_api.protocols import InvalidationNotifier
from catalog_api.repositories import (
    JsonFileCollectionSource,
    LocalInvalidationNotifier,
    RedisInvalidationNotifier,
)
from catalog_api.services import ItemService, SourceWatcher, StatsCache

logger = logging.getLogger(__name__)


def get_item_handler(request: Request) -> ItemHandler:
    """Dependency injection for ItemHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "item_handler", None)
    if handler is None:
        raise RuntimeError("ItemHandler not initialized. Check lifespan setup.")
    return handler


def get_stats_handler(request: Request) -> StatsHandler:
    """Dependency injection for StatsHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "stats_handler", None)
    if handler is None:
        raise RuntimeError("StatsHandler not initialized. Check lifespan setup.")
    return handler


def _log_listener_exit(task: asyncio.Task[None]) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.error("Redis invalidation listener stopped", exc_info=task.exception())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Collection source (data access)
    2. Stats cache, invalidation notifier and source watcher
    3. Item service
    4. Handlers (HTTP endpoints)

    Cleanup:
        Stops background tasks and removes everything from app.state
    """
    settings: Settings = app.state.settings

    source = JsonFileCollectionSource.create(settings.data_path)
    if not source.exists():
        logger.warning("Data file %s does not exist yet; reads will fail until it is created", source.path)

    stats_cache = StatsCache.create(source=source, io_timeout=settings.io_timeout)

    notifier: InvalidationNotifier
    listener: asyncio.Task[None] | None = None
    if settings.redis_enabled:
        notifier = RedisInvalidationNotifier(
            client=get_redis_client(settings),
            cache=stats_cache,
            channel=settings.invalidation_channel,
        )
    else:
        notifier = LocalInvalidationNotifier(stats_cache)

    item_service = ItemService.create(
        source=source,
        notifier=notifier,
        io_timeout=settings.io_timeout,
        default_limit=settings.default_limit,
    )

    watcher = SourceWatcher(
        source=source,
        cache=stats_cache,
        interval=settings.watch_interval,
        io_timeout=settings.io_timeout,
    )
    if settings.watch_enabled:
        await watcher.start()

    app.state.source = source
    app.state.stats_cache = stats_cache
    app.state.notifier = notifier
    app.state.watcher = watcher
    app.state.item_service = item_service
    app.state.item_handler = ItemHandler(item_service=item_service)
    app.state.stats_handler = StatsHandler(stats_cache=stats_cache)

    # Nothing after this point can fail before yield.
    if isinstance(notifier, RedisInvalidationNotifier):
        listener = asyncio.create_task(notifier.listen(), name="stats-invalidation-listener")
        listener.add_done_callback(_log_listener_exit)

    logger.info("Catalog API started")
    logger.info("Data file: %s", source.path)
    logger.info("Source watch: %s", "on" if settings.watch_enabled else "off")
    logger.info("Redis invalidation fan-out: %s", "on" if settings.redis_enabled else "off")

    yield

    await watcher.stop()
    if listener is not None:
        listener.cancel()
        await asyncio.gather(listener, return_exceptions=True)
    if isinstance(notifier, RedisInvalidationNotifier):
        await notifier.close()

    del app.state.stats_handler
    del app.state.item_handler
    del app.state.item_service
    del app.state.watcher
    del app.state.notifier
    del app.state.stats_cache
    del app.state.source
    logger.info("Catalog API shut down")


# Type aliases for cleaner dependency injection
ItemHandlerDep = Annotated[ItemHandler, Depends(get_item_handler)]
StatsHandlerDep = Annotated[StatsHandler, Depends(get_stats_handler)]
