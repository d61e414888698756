"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract consumed by the
frontend. They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import CreateItemRequest
from .responses import (
    CacheMetricsResponse,
    ErrorResponse,
    HealthCheckResponse,
    ItemListResponse,
    ItemResponse,
    StatsResponse,
)

__all__ = [
    "CreateItemRequest",
    "ItemResponse",
    "ItemListResponse",
    "StatsResponse",
    "CacheMetricsResponse",
    "HealthCheckResponse",
    "ErrorResponse",
]
