"""In-process implementation of InvalidationNotifier."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catalog_api.services import StatsCache

logger = logging.getLogger(__name__)


class LocalInvalidationNotifier:
    """Invalidate a stats cache living in the same process.

    This class satisfies the InvalidationNotifier protocol through
    structural typing - no explicit inheritance needed.
    """

    def __init__(self, cache: "StatsCache") -> None:
        self._cache = cache

    async def publish(self, reason: str) -> None:
        """Drop the cached snapshot."""
        logger.debug("Local invalidation: %s", reason)
        self._cache.invalidate()
