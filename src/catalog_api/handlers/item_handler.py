"""HTTP handlers for item operations.

Handlers convert between DTOs (API contracts) and service calls. Domain
errors are not caught here; they propagate to the app's exception
handlers, which map them to status codes.
"""

from catalog_api.dto import CreateItemRequest, ItemListResponse, ItemResponse
from catalog_api.errors import NotFoundError
from catalog_api.services import ItemService


class ItemHandler:
    """HTTP handlers for item listing, lookup and creation.

    Example:
        ```python
        handler = ItemHandler(item_service=ItemService.create(source=source))

        @router.get("/items", response_model=ItemListResponse)
        async def list_items(page: int = 1, limit: int = 20, q: str | None = None):
            return await handler.list_items(page, limit, q)
        ```
    """

    def __init__(self, item_service: ItemService) -> None:
        """Initialize the item handler.

        Args:
            item_service: The item service for business logic (required).
        """
        self._items = item_service

    async def list_items(self, page: int, limit: int | None, q: str | None) -> ItemListResponse:
        """Handle GET /items requests."""
        result = await self._items.list_items(page=page, limit=limit, query=q)
        return ItemListResponse.from_entity(result)

    async def get_item(self, item_id: str) -> ItemResponse:
        """Handle GET /items/{id} requests.

        A path id that is not an integer cannot match any item, so it is
        reported as not found rather than as a validation failure.

        Raises:
            NotFoundError: If the id is malformed or unknown
        """
        try:
            parsed_id = int(item_id)
        except ValueError as e:
            raise NotFoundError(f"Item {item_id} not found") from e
        item = await self._items.get_item(parsed_id)
        return ItemResponse.from_entity(item)

    async def create_item(self, request: CreateItemRequest) -> ItemResponse:
        """Handle POST /items requests."""
        item = await self._items.create_item(
            name=request.name,
            category=request.category,
            price=request.price,
        )
        return ItemResponse.from_entity(item)
