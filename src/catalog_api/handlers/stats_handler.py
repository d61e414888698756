"""HTTP handlers for stats operations."""

from catalog_api.dto import CacheMetricsResponse, StatsResponse
from catalog_api.services import StatsCache


class StatsHandler:
    """HTTP handlers for aggregate stats and cache introspection."""

    def __init__(self, stats_cache: StatsCache) -> None:
        """Initialize the stats handler.

        Args:
            stats_cache: The stats cache (required).
        """
        self._stats = stats_cache

    async def get_stats(self) -> StatsResponse:
        """Handle GET /stats requests."""
        snapshot = await self._stats.get()
        return StatsResponse.from_entity(snapshot)

    async def get_cache_metrics(self) -> CacheMetricsResponse:
        """Handle GET /stats/cache requests."""
        return CacheMetricsResponse(state=self._stats.state, **self._stats.metrics.to_dict())
