"""Stats snapshot domain entity."""

from collections.abc import Sequence
from dataclasses import dataclass

from .item import ItemEntity


@dataclass(frozen=True)
class StatsSnapshotEntity:
    """Aggregate values derived from the whole collection.

    Attributes:
        total: Number of items
        average_price: Arithmetic mean of item prices (0 for an empty collection)
    """

    total: int
    average_price: float

    @classmethod
    def from_items(cls, items: Sequence[ItemEntity]) -> "StatsSnapshotEntity":
        """Compute a snapshot over ``items``."""
        total = len(items)
        if total == 0:
            return cls(total=0, average_price=0)
        return cls(total=total, average_price=sum(item.price for item in items) / total)
