#!/usr/bin/env python3
"""
Demo script for the catalog services.

Seeds a throwaway data file, then walks through search, pagination,
item creation and stats cache invalidation without starting the HTTP API.
"""

import argparse
import asyncio
import random
import tempfile
from pathlib import Path

from catalog_api.entities import ItemEntity
from catalog_api.repositories import JsonFileCollectionSource, LocalInvalidationNotifier
from catalog_api.services import ItemService, StatsCache

CATEGORIES = {
    "Electronics": ["Laptop", "Monitor", "Headphones", "Tablet", "Phone"],
    "Furniture": ["Desk", "Chair", "Bookshelf", "Lamp"],
    "Accessories": ["Keyboard", "Mouse", "Laptop Sleeve", "USB Hub"],
}
ADJECTIVES = ["Pro", "Ultra", "Compact", "Gaming", "Ergonomic", "Wireless"]


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def generate_items(count: int, seed: int = 42) -> list[ItemEntity]:
    """Generate ``count`` random catalog items with ids 1..count."""
    rng = random.Random(seed)
    items = []
    for item_id in range(1, count + 1):
        category = rng.choice(list(CATEGORIES))
        name = f"{rng.choice(ADJECTIVES)} {rng.choice(CATEGORIES[category])}"
        items.append(ItemEntity(id=item_id, name=name, category=category, price=rng.randint(10, 3000)))
    return items


async def demo_queries(service: ItemService) -> None:
    """Demonstrate search and pagination."""
    print_section("Search & Pagination")

    page = await service.list_items(page=1, limit=5)
    print(f"\n📄 Page 1 of all items ({page.total} total):")
    for item in page.items:
        print(f"  {item.id:>4}. {item.name:<28} {item.category:<12} ${item.price}")

    page = await service.list_items(page=1, limit=5, query="LAPTOP")
    print(f"\n🔍 Search 'LAPTOP' ({page.total} matches):")
    for item in page.items:
        print(f"  {item.id:>4}. {item.name}")

    page = await service.list_items(page=10_000, limit=5)
    print(f"\n📭 Page 10000: {len(page.items)} items (total still {page.total})")


async def demo_stats_cache(service: ItemService, cache: StatsCache) -> None:
    """Demonstrate cache hits and invalidation after a write."""
    print_section("Stats Cache")

    first = await cache.get()
    second = await cache.get()
    print(f"\n📊 Stats: total={first.total}, averagePrice={first.average_price:.2f}")
    print(f"  Second read served from cache: {first is second}")

    item = await service.create_item(name="Demo Laptop", category="Electronics", price=5000)
    print(f"\n➕ Created item {item.id} ({item.name}); cache state is now '{cache.state}'")

    third = await cache.get()
    print(f"📊 Stats: total={third.total}, averagePrice={third.average_price:.2f}")
    print(f"  Metrics: {cache.metrics.to_dict()}")


async def run(count: int, output: Path | None) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = output or Path(tmp) / "items.json"
        source = JsonFileCollectionSource.create(path)
        source.write_items(generate_items(count))
        print(f"\n📝 Seeded {count} items into {path}")

        cache = StatsCache.create(source=source)
        service = ItemService.create(source=source, notifier=LocalInvalidationNotifier(cache))

        await demo_queries(service)
        await demo_stats_cache(service, cache)


def main() -> None:
    """Run all demos."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--count", type=int, default=500, help="number of items to generate")
    parser.add_argument("--output", type=Path, help="keep the generated data file at this path")
    args = parser.parse_args()

    print("\n🚀 Catalog Demo")
    print("=" * 70)

    try:
        asyncio.run(run(args.count, args.output))

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")


if __name__ == "__main__":
    main()
