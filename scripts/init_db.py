"""Create the database schema and report the reference data it serves."""

from __future__ import annotations

import asyncio
from typing import Iterable

from wearaware.catalog.item_types import ItemType, list_item_types
from wearaware.config.settings import get_settings
from wearaware.db.session import init_db
from wearaware.impact.fibers import available_fibers


def _format_item_type(item: ItemType) -> str:
    return f"  {item.name:<10} {item.weight_grams:>4} g  ({item.category})"


def print_item_types(items: Iterable[ItemType]) -> None:
    for item in items:
        print(_format_item_type(item))


def main() -> None:
    settings = get_settings()
    asyncio.run(init_db())
    print(f"✅ Schema ready at {settings.database_url}")
    print(f"{len(available_fibers())} fibers in the reference table")
    print("Default garment weights:")
    print_item_types(list_item_types())


if __name__ == "__main__":
    main()
