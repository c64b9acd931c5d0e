"""Typical garment weights used when the real weight is unknown."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True)
class ItemType:
    """Clothing category with its estimated weight in grams."""

    name: str
    weight_grams: int
    category: str


DEFAULT_ITEM_TYPE = "Garment"
DEFAULT_WEIGHT_GRAMS = 300
DEFAULT_CATEGORY = "general"

_ITEM_TYPES: tuple[ItemType, ...] = (
    ItemType("Shirt", 200, "tops"),
    ItemType("T-Shirt", 150, "tops"),
    ItemType("Blouse", 180, "tops"),
    ItemType("Sweater", 400, "tops"),
    ItemType("Hoodie", 500, "tops"),
    ItemType("Jacket", 600, "outerwear"),
    ItemType("Coat", 800, "outerwear"),
    ItemType("Jeans", 600, "bottoms"),
    ItemType("Pants", 400, "bottoms"),
    ItemType("Shorts", 250, "bottoms"),
    ItemType("Skirt", 300, "bottoms"),
    ItemType("Dress", 350, "dresses"),
    ItemType("Underwear", 50, "undergarments"),
    ItemType("Socks", 40, "undergarments"),
    ItemType("Scarf", 100, "accessories"),
    ItemType(DEFAULT_ITEM_TYPE, DEFAULT_WEIGHT_GRAMS, DEFAULT_CATEGORY),
)

ITEM_TYPES: Mapping[str, ItemType] = MappingProxyType(
    {item.name.lower(): item for item in _ITEM_TYPES}
)


def get_item_type(name: str | None) -> ItemType:
    """Return the catalog entry for ``name`` or a 300 g generic garment."""

    key = (name or "").strip()
    item = ITEM_TYPES.get(key.lower())
    if item is not None:
        return item
    return ItemType(key or DEFAULT_ITEM_TYPE, DEFAULT_WEIGHT_GRAMS, DEFAULT_CATEGORY)


def get_item_weight(name: str | None) -> int:
    return get_item_type(name).weight_grams


def list_item_types() -> list[ItemType]:
    return sorted(ITEM_TYPES.values(), key=lambda item: item.name)
