"""Item domain entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ItemEntity:
    """A single catalog record.

    Attributes:
        id: Unique identifier, assigned on creation and never changed
        name: Display name, used for search
        category: Free-form category label
        price: Unit price
    """

    id: int
    name: str
    category: str
    price: float


@dataclass(frozen=True)
class ItemPageEntity:
    """One page of a (possibly filtered) item listing.

    ``page`` and ``limit`` echo the request even when ``items`` is
    shorter than ``limit`` or empty.
    """

    items: list[ItemEntity]
    total: int
    page: int
    limit: int
