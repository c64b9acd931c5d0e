"""Tests for default garment weights."""

import pytest

from wearaware.catalog.item_types import ItemType, get_item_type, get_item_weight, list_item_types


@pytest.mark.parametrize(
    ("name", "weight"),
    [
        ("Shirt", 200),
        ("t-shirt", 150),
        ("JEANS", 600),
        (" Coat ", 800),
        ("Socks", 40),
        ("Garment", 300),
    ],
)
def test_known_item_weights(name: str, weight: int) -> None:
    assert get_item_weight(name) == weight


def test_unknown_item_type_defaults_to_300_grams() -> None:
    assert get_item_type("Kimono") == ItemType("Kimono", 300, "general")
    assert get_item_type(None) == ItemType("Garment", 300, "general")
    assert get_item_weight("") == 300


def test_list_item_types() -> None:
    items = list_item_types()

    assert len(items) == 16
    assert [item.name for item in items] == sorted(item.name for item in items)
    assert {item.category for item in items} == {
        "tops",
        "outerwear",
        "bottoms",
        "dresses",
        "undergarments",
        "accessories",
        "general",
    }
