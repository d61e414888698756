"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .item_handler import ItemHandler
from .stats_handler import StatsHandler

__all__ = [
    "ItemHandler",
    "StatsHandler",
]
