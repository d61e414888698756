"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class CreateItemRequest(BaseModel):
    """Request DTO for creating an item.

    Every field is optional here so that a missing field reaches the
    service, which reports all missing fields in one message.
    """

    name: str | None = Field(None, description="Item display name")
    category: str | None = Field(None, description="Item category")
    price: float | None = Field(None, description="Unit price", allow_inf_nan=False)
