"""Catalog API - paginated item catalog with cached aggregate stats.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (CollectionSource, InvalidationNotifier)
    - repositories: Data access implementations (JSON file, Redis pub/sub)
    - services: Business logic (item queries, stats cache, source watch)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from catalog_api.repositories import JsonFileCollectionSource
    from catalog_api.services import ItemService, StatsCache

    source = JsonFileCollectionSource.create("data/items.json")
    stats = StatsCache.create(source=source)
    snapshot = await stats.get()
    ```

For HTTP API:
    ```python
    from catalog_api.api.app import app, create_app
    ```
"""

__version__ = "0.1.0"

from catalog_api.config import Settings, get_settings, settings  # noqa: E402
from catalog_api.dto import CreateItemRequest  # noqa: E402
from catalog_api.entities import ItemEntity, ItemPageEntity, StatsSnapshotEntity  # noqa: E402
from catalog_api.errors import CatalogError, NotFoundError, SourceError, ValidationError  # noqa: E402
from catalog_api.handlers import ItemHandler, StatsHandler  # noqa: E402
from catalog_api.protocols import CollectionSource, InvalidationNotifier  # noqa: E402
from catalog_api.repositories import (  # noqa: E402
    JsonFileCollectionSource,
    LocalInvalidationNotifier,
    RedisInvalidationNotifier,
)
from catalog_api.services import ItemService, SourceWatcher, StatsCache  # noqa: E402

__all__ = [
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
    "settings",
    # Errors
    "CatalogError",
    "NotFoundError",
    "SourceError",
    "ValidationError",
    # Protocols (interfaces)
    "CollectionSource",
    "InvalidationNotifier",
    # Services (business logic)
    "ItemService",
    "SourceWatcher",
    "StatsCache",
    # Handlers (HTTP)
    "ItemHandler",
    "StatsHandler",
    # Repositories (data access)
    "JsonFileCollectionSource",
    "LocalInvalidationNotifier",
    "RedisInvalidationNotifier",
    # Entities (domain models)
    "ItemEntity",
    "ItemPageEntity",
    "StatsSnapshotEntity",
    # DTOs (API contracts)
    "CreateItemRequest",
]
