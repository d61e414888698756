"""Protocol interfaces for swappable implementations.

Protocols enable:
- Swapping the collection backend (JSON file today, a database later)
- Unit testing with in-memory fakes
- Fan-out of cache invalidations without coupling services together
"""

from .collection_source import CollectionSource
from .invalidation_notifier import InvalidationNotifier

__all__ = [
    "CollectionSource",
    "InvalidationNotifier",
]
