"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from catalog_api.entities import ItemEntity, ItemPageEntity, StatsSnapshotEntity


class ItemResponse(BaseModel):
    """A single item."""

    id: int = Field(..., description="Unique item id")
    name: str = Field(..., description="Item display name")
    category: str = Field(..., description="Item category")
    price: float = Field(..., description="Unit price")

    @classmethod
    def from_entity(cls, item: ItemEntity) -> "ItemResponse":
        return cls(id=item.id, name=item.name, category=item.category, price=item.price)


class ItemListResponse(BaseModel):
    """One page of items.

    ``page`` and ``limit`` echo the request; ``total`` counts every item
    matching the search, not just the ones on this page.
    """

    items: list[ItemResponse] = Field(default_factory=list, description="Items on this page")
    total: int = Field(..., description="Number of items matching the query", ge=0)
    page: int = Field(..., description="Requested page (1-based)", ge=1)
    limit: int = Field(..., description="Requested page size", ge=1)

    @classmethod
    def from_entity(cls, page: ItemPageEntity) -> "ItemListResponse":
        return cls(
            items=[ItemResponse.from_entity(item) for item in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
        )


class StatsResponse(BaseModel):
    """Aggregate statistics over the whole collection."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(..., description="Number of items", ge=0)
    average_price: float = Field(
        ...,
        description="Mean item price (0 when there are no items)",
        alias="averagePrice",
    )

    @classmethod
    def from_entity(cls, snapshot: StatsSnapshotEntity) -> "StatsResponse":
        return cls(total=snapshot.total, average_price=snapshot.average_price)


class CacheMetricsResponse(BaseModel):
    """Stats cache state and activity counters."""

    state: str = Field(..., description="'empty' or 'valid'")
    hits: int = Field(..., ge=0)
    misses: int = Field(..., ge=0)
    recomputations: int = Field(..., description="Full source reads", ge=0)
    invalidations: int = Field(..., ge=0)
    failures: int = Field(..., ge=0)
    hit_rate: float = Field(..., ge=0.0, le=1.0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    source_available: bool = Field(..., description="Whether the data file exists")
    watcher_running: bool = Field(..., description="Whether the background source watch is active")
    redis_healthy: bool | None = Field(
        None,
        description="Whether Redis is reachable (null when Redis fan-out is disabled)",
    )


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    message: str = Field(..., description="Human-readable error message")
    details: list[dict[str, Any]] | None = Field(None, description="Field-level validation errors")
