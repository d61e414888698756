"""Item service for listing, lookup and creation.

Reads go straight to the collection source on every call. Creation is a
read-modify-write of the whole collection and is serialized so that two
concurrent requests can never be assigned the same id.
"""

import logging
import math
import threading

from catalog_api.config import settings
from catalog_api.entities import ItemEntity, ItemPageEntity
from catalog_api.errors import NotFoundError, ValidationError
from catalog_api.protocols import CollectionSource, InvalidationNotifier
from catalog_api.utils import run_blocking

logger = logging.getLogger(__name__)


class ItemService:
    """Query and create catalog items.

    The service depends on PROTOCOLS, not concrete implementations:
    - CollectionSource: JSON file today, anything list-shaped tomorrow
    - InvalidationNotifier: optional; told about every successful write

    Example:
        ```python
        from catalog_api.repositories import JsonFileCollectionSource
        from catalog_api.services import ItemService

        service = ItemService.create(source=JsonFileCollectionSource.create())
        page = await service.list_items(page=1, limit=20, query="laptop")
        ```
    """

    def __init__(
        self,
        source: CollectionSource,
        notifier: InvalidationNotifier | None = None,
        io_timeout: float | None = None,
        default_limit: int | None = None,
    ) -> None:
        """Initialize the item service.

        Args:
            source: Collection source (required).
            notifier: Told when the collection changes. Optional.
            io_timeout: Seconds allowed per source call. Defaults to settings.
            default_limit: Page size when none is requested. Defaults to settings.
        """
        self._source = source
        self._notifier = notifier
        self._io_timeout = io_timeout or settings.io_timeout
        self._default_limit = default_limit or settings.default_limit
        # Held by the worker thread for the whole read-modify-write, so a
        # timed-out request keeps it until its write has landed.
        self._write_lock = threading.Lock()

    @classmethod
    def create(
        cls,
        source: CollectionSource,
        notifier: InvalidationNotifier | None = None,
        io_timeout: float | None = None,
        default_limit: int | None = None,
    ) -> "ItemService":
        """Factory method to create ItemService with sensible defaults.

        Args:
            source: Collection source (required).
            notifier: Optional invalidation notifier.
            io_timeout: Per-call I/O timeout. If None, uses settings.
            default_limit: Default page size. If None, uses settings.

        Returns:
            Configured ItemService instance
        """
        return cls(source=source, notifier=notifier, io_timeout=io_timeout, default_limit=default_limit)

    async def list_items(self, page: int = 1, limit: int | None = None, query: str | None = None) -> ItemPageEntity:
        """List one page of items, optionally filtered by name.

        Business logic:
        1. Load the full collection
        2. Keep items whose name contains ``query``, ignoring case
        3. Count what is left
        4. Slice out the requested page (empty when out of range)

        Args:
            page: 1-based page number
            limit: Page size. Defaults to the service's default limit.
            query: Case-insensitive name substring. Empty means no filter.

        Returns:
            ItemPageEntity echoing the requested page and limit

        Raises:
            ValidationError: If page or limit is below 1
            SourceError: If the collection cannot be read
        """
        limit = self._default_limit if limit is None else limit
        if page < 1 or limit < 1:
            raise ValidationError(f"page and limit must be positive integers, got page={page}, limit={limit}")

        items = await run_blocking(self._source.read_items, timeout=self._io_timeout)

        if query:
            needle = query.casefold()
            items = [item for item in items if needle in item.name.casefold()]

        offset = (page - 1) * limit
        return ItemPageEntity(
            items=items[offset : offset + limit],
            total=len(items),
            page=page,
            limit=limit,
        )

    async def get_item(self, item_id: int) -> ItemEntity:
        """Look up a single item by id.

        Raises:
            NotFoundError: If no item has this id
            SourceError: If the collection cannot be read
        """
        items = await run_blocking(self._source.read_items, timeout=self._io_timeout)
        for item in items:
            if item.id == item_id:
                return item
        raise NotFoundError(f"Item {item_id} not found")

    async def create_item(
        self,
        name: str | None,
        category: str | None,
        price: float | None,
    ) -> ItemEntity:
        """Validate, assign the next id, and persist a new item.

        Business logic:
        1. Reject the request if any field is absent
        2. Under the write lock: read, compute max id + 1, append, write
        3. Notify listeners that the collection changed

        Args:
            name: Item name (required, non-empty)
            category: Item category (required, non-empty)
            price: Item price (required; 0 is allowed)

        Returns:
            The created ItemEntity

        Raises:
            ValidationError: If a required field is missing or price is not finite
            SourceError: If the collection cannot be read or written
        """
        missing = [
            field
            for field, value in (("name", name), ("category", category), ("price", price))
            if value is None or value == ""
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        if not math.isfinite(price):
            raise ValidationError(f"price must be a finite number, got {price}")

        item = await run_blocking(self._append, name, category, price, timeout=self._io_timeout)
        logger.info("Created item %d (%s)", item.id, item.name)

        if self._notifier is not None:
            try:
                await self._notifier.publish(f"item {item.id} created")
            except Exception:
                logger.exception("Invalidation notification failed for item %d", item.id)

        return item

    def _append(self, name: str, category: str, price: float) -> ItemEntity:
        """Read-modify-write critical section; runs in a worker thread."""
        with self._write_lock:
            items = self._source.read_items()
            next_id = max((item.id for item in items), default=0) + 1
            item = ItemEntity(id=next_id, name=name, category=category, price=price)
            self._source.write_items([*items, item])
            return item
