"""Shared fixtures for catalog engine tests.

Scenario catalog:

    Collections          Categories
    A (1): {1, 3}        10
    └── A1 (2): {4}      └── 11
    B (3): {2}           20
                         30

    Products: 1 -> {10}, 2 -> {20}, 3 -> {11}, 4 -> {30}, 5 -> {}
    Shop S (1) carries collections {A, B}.
"""

import pytest

from catalog_api.catalog.snapshot import CatalogSnapshot
from catalog_api.domain.entities import Category, Collection, Product, Shop

COLLECTION_A = 1
COLLECTION_A1 = 2
COLLECTION_B = 3


@pytest.fixture
def categories() -> tuple[Category, ...]:
    """Scenario categories."""
    return (
        Category(id=10, name="Electronics"),
        Category(id=11, name="Laptops", parent_id=10),
        Category(id=20, name="Furniture"),
        Category(id=30, name="Toys"),
    )


@pytest.fixture
def products() -> tuple[Product, ...]:
    """Scenario products."""
    return (
        Product(id=1, name="Phone", price=499.0, category_ids=frozenset({10})),
        Product(id=2, name="Chair", price=89.0, category_ids=frozenset({20})),
        Product(id=3, name="Ultrabook", price=1299.0, category_ids=frozenset({11})),
        Product(id=4, name="Puzzle", price=15.0, category_ids=frozenset({30})),
        Product(id=5, name="Gift Card", price=25.0),
    )


@pytest.fixture
def collections() -> tuple[Collection, ...]:
    """Scenario collections."""
    return (
        Collection(id=COLLECTION_A, name="A", product_ids=frozenset({1, 3})),
        Collection(
            id=COLLECTION_A1, name="A1", parent_id=COLLECTION_A, product_ids=frozenset({4})
        ),
        Collection(id=COLLECTION_B, name="B", product_ids=frozenset({2})),
    )


@pytest.fixture
def snapshot(products, categories, collections) -> CatalogSnapshot:
    """Scenario snapshot."""
    return CatalogSnapshot(products=products, categories=categories, collections=collections)


@pytest.fixture
def shop() -> Shop:
    """Shop S carrying collections A and B."""
    return Shop(id=1, name="S", collection_ids=frozenset({COLLECTION_A, COLLECTION_B}))
