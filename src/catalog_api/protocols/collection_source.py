"""Collection source protocol.

Defines the interface for the persistent, ordered collection of items
that both the item service and the stats cache read from.

The collection is read and written wholesale; there is no partial or
streaming access.
"""

from typing import Protocol, runtime_checkable

from catalog_api.entities import ItemEntity
from catalog_api.entities.cache_entry import SourceVersion


@runtime_checkable
class CollectionSource(Protocol):
    """Protocol for item collection backends.

    All methods are blocking; async callers run them through
    ``catalog_api.utils.run_blocking``.
    """

    def read_items(self) -> list[ItemEntity]:
        """Read the full collection.

        Returns:
            Items in stored order

        Raises:
            SourceError: If the collection is unreadable or malformed
        """
        ...

    def write_items(self, items: list[ItemEntity]) -> None:
        """Replace the full collection.

        A concurrent ``read_items`` must observe either the previous
        collection or the new one, never a partial write.

        Args:
            items: The complete new collection

        Raises:
            SourceError: If the collection cannot be written
        """
        ...

    def version(self) -> SourceVersion:
        """Return a token that changes whenever the collection changes.

        Raises:
            SourceError: If the collection cannot be inspected
        """
        ...

    def exists(self) -> bool:
        """Check if the collection is present.

        Returns:
            True if present, False otherwise
        """
        ...
