"""JSON file implementation of CollectionSource.

The whole collection lives in one file holding a JSON array of item
records. Writes go to a temporary file in the same directory which is
then renamed over the target, so readers never see a half-written
document.
"""

import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any

from catalog_api.config import settings
from catalog_api.entities import ItemEntity
from catalog_api.entities.cache_entry import SourceVersion
from catalog_api.errors import SourceError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "name", "category", "price")


class JsonFileCollectionSource:
    """Flat JSON file collection.

    This class satisfies the CollectionSource protocol through structural
    typing - no explicit inheritance needed.

    The version token is ``(st_mtime_ns, st_size, st_ino, writes)``. The
    stat fields catch edits made by other processes or tools; ``writes``
    counts this instance's own writes, so two of them landing within one
    filesystem timestamp tick still produce different versions.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the JSON file source.

        Args:
            path: Location of the JSON document.
        """
        self._path = Path(path)
        self._reads = 0
        self._writes = 0

    @classmethod
    def create(cls, path: str | Path | None = None) -> "JsonFileCollectionSource":
        """Factory method to create JsonFileCollectionSource with defaults.

        Args:
            path: Data file location. If None, uses settings.

        Returns:
            Configured JsonFileCollectionSource
        """
        return cls(path=path or settings.data_path)

    def read_items(self) -> list[ItemEntity]:
        """Read and parse the full collection.

        Returns:
            Items in stored order

        Raises:
            SourceError: If the file is missing, unreadable or malformed
        """
        self._reads += 1
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise SourceError(f"Failed to read {self._path}: {e}") from e

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SourceError(f"Malformed JSON in {self._path}: {e}") from e

        if not isinstance(records, list):
            raise SourceError(f"Expected a JSON array in {self._path}, got {type(records).__name__}")

        return [self._from_record(index, record) for index, record in enumerate(records)]

    def write_items(self, items: list[ItemEntity]) -> None:
        """Atomically replace the collection.

        Args:
            items: The complete new collection

        Raises:
            SourceError: If the file cannot be written
        """
        payload = json.dumps([self._to_record(item) for item in items], indent=2)
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=directory)
        except OSError as e:
            raise SourceError(f"Failed to write {self._path}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise SourceError(f"Failed to write {self._path}: {e}") from e

        self._writes += 1
        logger.debug("Wrote %d items to %s", len(items), self._path)

    def version(self) -> SourceVersion:
        """Return the current version token of the file.

        Raises:
            SourceError: If the file cannot be stat'ed
        """
        try:
            stat = self._path.stat()
        except OSError as e:
            raise SourceError(f"Failed to stat {self._path}: {e}") from e
        return (stat.st_mtime_ns, stat.st_size, stat.st_ino, self._writes)

    def exists(self) -> bool:
        """Check if the data file exists."""
        return self._path.is_file()

    def _from_record(self, index: int, record: Any) -> ItemEntity:
        """Convert one stored JSON object into an ItemEntity."""
        if not isinstance(record, dict):
            raise SourceError(f"Record {index} in {self._path} is not an object")

        missing = [name for name in REQUIRED_FIELDS if name not in record]
        if missing:
            raise SourceError(f"Record {index} in {self._path} is missing {', '.join(missing)}")

        item_id, price = record["id"], record["price"]
        if isinstance(item_id, bool) or not isinstance(item_id, int):
            raise SourceError(f"Record {index} in {self._path} has a non-integer id")
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise SourceError(f"Record {index} in {self._path} has a non-numeric price")
        if not math.isfinite(price):
            raise SourceError(f"Record {index} in {self._path} has a non-finite price")

        name, category = record["name"], record["category"]
        if not isinstance(name, str) or not isinstance(category, str):
            raise SourceError(f"Record {index} in {self._path} has a non-string name or category")

        return ItemEntity(id=item_id, name=name, category=category, price=price)

    @staticmethod
    def _to_record(item: ItemEntity) -> dict[str, Any]:
        """Convert an ItemEntity into its stored JSON object."""
        return {
            "id": item.id,
            "name": item.name,
            "category": item.category,
            "price": item.price,
        }

    @property
    def path(self) -> Path:
        """Get the data file path."""
        return self._path

    @property
    def reads(self) -> int:
        """Number of full content reads performed."""
        return self._reads
