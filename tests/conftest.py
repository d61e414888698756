"""Shared fixtures for the catalog API tests."""

import json
import threading
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from catalog_api.api.app import create_app
from catalog_api.config import Settings
from catalog_api.entities import ItemEntity
from catalog_api.errors import SourceError
from catalog_api.repositories import JsonFileCollectionSource

SAMPLE_ITEMS = [
    {"id": 1, "name": "Gaming Laptop", "category": "Electronics", "price": 10},
    {"id": 2, "name": "Office Chair", "category": "Furniture", "price": 20},
    {"id": 3, "name": "Laptop Stand", "category": "Accessories", "price": 30},
]


class InMemorySource:
    """CollectionSource fake with an observable read count.

    Every write bumps the version. Tests can also bump it directly to
    simulate an out-of-band edit, or make reads fail.
    """

    def __init__(self, items: list[ItemEntity] | None = None) -> None:
        self.items = list(items or [])
        self.reads = 0
        self.generation = 1
        self.fail_reads = False
        self.before_read = None
        self.read_gate: threading.Event | None = None
        self._lock = threading.Lock()

    def read_items(self) -> list[ItemEntity]:
        if self.read_gate is not None:
            self.read_gate.wait(timeout=5)
        with self._lock:
            self.reads += 1
            if self.before_read is not None:
                self.before_read(self)
            if self.fail_reads:
                raise SourceError("simulated read failure")
            return list(self.items)

    def write_items(self, items: list[ItemEntity]) -> None:
        with self._lock:
            self.items = list(items)
            self.generation += 1

    def version(self) -> tuple[int, int, int]:
        return (self.generation, 0, 0)

    def exists(self) -> bool:
        return True

    def touch(self) -> None:
        self.generation += 1


def make_items(prices: list[float]) -> list[ItemEntity]:
    return [
        ItemEntity(id=index, name=f"Item {index}", category="Test", price=price)
        for index, price in enumerate(prices, start=1)
    ]


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """A data file holding the three sample items."""
    path = tmp_path / "items.json"
    path.write_text(json.dumps(SAMPLE_ITEMS), encoding="utf-8")
    return path


@pytest.fixture
def file_source(data_file: Path) -> JsonFileCollectionSource:
    return JsonFileCollectionSource(data_file)


@pytest.fixture
def memory_source() -> InMemorySource:
    return InMemorySource(make_items([10, 20, 30]))


@pytest.fixture
def app_settings(data_file: Path) -> Settings:
    return Settings(
        data_path=str(data_file),
        io_timeout=5.0,
        default_limit=20,
        watch_enabled=False,
        redis_url=None,
        api_prefix="",
    )


@pytest.fixture
def client(app_settings: Settings):
    """Create a test client with the lifespan running."""
    with TestClient(create_app(app_settings)) as test_client:
        yield test_client
