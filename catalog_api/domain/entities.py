"""Catalog snapshot entities.

Immutable records handed to the catalog engine. The engine never mutates
or persists them; it only reads a snapshot and returns computed views and
decisions.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Category:
    """A product category.

    Attributes:
        id: Unique category identifier.
        name: Display name.
        parent_id: Parent category ID (None for a root category).
    """

    id: int
    name: str
    parent_id: int | None = None


@dataclass(frozen=True)
class Collection:
    """A curated, hierarchical grouping of products.

    Only direct assignments are stored in ``product_ids``; membership
    inherited from child collections is computed by the engine.

    Attributes:
        id: Unique collection identifier.
        name: Display name.
        parent_id: Parent collection ID (None for a root collection).
        product_ids: Products directly assigned to this collection.
    """

    id: int
    name: str
    parent_id: int | None = None
    product_ids: frozenset[int] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Product:
    """A product in the catalog.

    Attributes:
        id: Unique product identifier.
        name: Product name.
        description: Product description.
        price: Price in major currency units.
        category_ids: Categories the product belongs to.
    """

    id: int
    name: str
    description: str = ""
    price: float = 0.0
    category_ids: frozenset[int] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Shop:
    """A shop front scoped by collections.

    Attributes:
        id: Unique shop identifier.
        name: Display name.
        collection_ids: Collections directly associated with the shop.
    """

    id: int
    name: str
    collection_ids: frozenset[int] = field(default_factory=frozenset)
