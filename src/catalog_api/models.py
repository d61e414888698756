from dataclasses import dataclass


@dataclass
class CacheMetrics:
    """Track stats cache activity."""

    hits: int = 0
    misses: int = 0
    recomputations: int = 0
    invalidations: int = 0
    failures: int = 0

    @property
    def lookups(self) -> int:
        """Total number of cache lookups."""
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.lookups == 0:
            return 0.0
        return self.hits / self.lookups

    def record_hit(self) -> None:
        """Record a cache hit."""
        self.hits += 1

    def record_miss(self) -> None:
        """Record a cache miss."""
        self.misses += 1

    def record_recompute(self) -> None:
        """Record a full read of the source to rebuild the snapshot."""
        self.recomputations += 1

    def record_invalidation(self) -> None:
        """Record an explicit invalidation."""
        self.invalidations += 1

    def record_failure(self) -> None:
        """Record a recompute that failed."""
        self.failures += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "recomputations": self.recomputations,
            "invalidations": self.invalidations,
            "failures": self.failures,
            "hit_rate": self.hit_rate,
        }
