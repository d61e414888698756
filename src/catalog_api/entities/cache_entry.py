"""Stats cache entry domain entity."""

from dataclasses import dataclass

from .stats_snapshot import StatsSnapshotEntity

SourceVersion = tuple[int, ...]


@dataclass(frozen=True)
class CacheEntryEntity:
    """A cached snapshot tagged with the source version it was computed from.

    The snapshot is valid only while the collection source still reports
    ``source_version``.

    Attributes:
        snapshot: The cached aggregate
        source_version: Source version observed before the content was read
    """

    snapshot: StatsSnapshotEntity
    source_version: SourceVersion
