"""Read-only catalog snapshot consumed by the engine."""

from dataclasses import dataclass
from functools import cached_property

from catalog_api.catalog.hierarchy import HierarchyIndex
from catalog_api.domain.entities import Category, Collection, Product


@dataclass(frozen=True)
class CatalogSnapshot:
    """Consistent view of products, categories and collections.

    Built once per request from the repository and discarded afterwards.
    Lookup tables and hierarchy indexes are derived lazily.
    """

    products: tuple[Product, ...] = ()
    categories: tuple[Category, ...] = ()
    collections: tuple[Collection, ...] = ()

    @cached_property
    def products_by_id(self) -> dict[int, Product]:
        return {p.id: p for p in self.products}

    @cached_property
    def categories_by_id(self) -> dict[int, Category]:
        return {c.id: c for c in self.categories}

    @cached_property
    def collections_by_id(self) -> dict[int, Collection]:
        return {c.id: c for c in self.collections}

    @cached_property
    def category_index(self) -> HierarchyIndex:
        return HierarchyIndex(self.categories)

    @cached_property
    def collection_index(self) -> HierarchyIndex:
        return HierarchyIndex(self.collections)
