"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from catalog_api.repositories import JsonFileCollectionSource
    from catalog_api.services import ItemService, StatsCache

    source = JsonFileCollectionSource.create()
    items = ItemService.create(source=source)
    stats = StatsCache.create(source=source)
    ```
"""

from .item_service import ItemService
from .source_watcher import SourceWatcher
from .stats_cache import StatsCache

__all__ = [
    "ItemService",
    "SourceWatcher",
    "StatsCache",
]
