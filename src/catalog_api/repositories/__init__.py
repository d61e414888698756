"""Repository layer for data access.

This layer hides external resources (the data file, Redis) behind
protocol-based interfaces. This enables:
- Swapping the JSON file for another backend without touching services
- Unit testing with in-memory fakes
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from catalog_api.protocols import CollectionSource, InvalidationNotifier

from .json_file_source import JsonFileCollectionSource
from .local_notifier import LocalInvalidationNotifier
from .redis_notifier import RedisInvalidationNotifier

__all__ = [
    "CollectionSource",
    "InvalidationNotifier",
    "JsonFileCollectionSource",
    "LocalInvalidationNotifier",
    "RedisInvalidationNotifier",
]
