"""Membership resolution for shop listings.

Decides which products (and, for category listings, which categories) are
visible to a shop under an optional collection filter and an optional
category filter.

Scope resolution, first matching rule wins:

1. An explicit collection filter scopes to that collection. Product
   listings always add its descendant collections; category listings add
   them unless ``direct_only`` is set.
2. Otherwise the shop's own collections scope the listing, exactly as
   stored (no descendant expansion).
3. Otherwise every product is in scope.

Candidate products are the union of the scoped collections' direct
``product_ids``. A category filter then keeps products with at least one
category inside the filter's closure.
"""

from dataclasses import dataclass

import structlog

from catalog_api.catalog.pagination import PaginatedResult, PaginationParams, paginate
from catalog_api.catalog.snapshot import CatalogSnapshot
from catalog_api.domain.entities import Category, Product, Shop

logger = structlog.get_logger()


@dataclass(frozen=True)
class CollectionScope:
    """Resolved collection scope of a listing.

    Attributes:
        collection_ids: Collections in scope, or None for "all products".
        rule: Which scope rule applied ("filter", "shop" or "all").
    """

    collection_ids: frozenset[int] | None
    rule: str

    @property
    def is_unrestricted(self) -> bool:
        """Check if the scope covers every product."""
        return self.collection_ids is None


class MembershipResolver:
    """Resolve shop listings against a catalog snapshot.

    Example:
        resolver = MembershipResolver(snapshot)
        page = resolver.products(shop, collection_id=3, params=PaginationParams())
        categories = resolver.categories(shop, collection_id=3, direct_only=True)
    """

    def __init__(self, snapshot: CatalogSnapshot) -> None:
        """Initialize resolver.

        Args:
            snapshot: Catalog snapshot to resolve against.
        """
        self.snapshot = snapshot

    def collection_scope(
        self,
        shop: Shop,
        collection_id: int | None = None,
        include_descendants: bool = True,
    ) -> CollectionScope:
        """Resolve the collection scope for a shop.

        Args:
            shop: Shop whose listing is being resolved.
            collection_id: Explicit collection filter.
            include_descendants: Whether an explicit filter expands to
                descendant collections.

        Returns:
            The resolved scope.
        """
        if collection_id is not None:
            if include_descendants:
                ids = self.snapshot.collection_index.closure(collection_id)
            else:
                ids = {collection_id}
            return CollectionScope(collection_ids=frozenset(ids), rule="filter")

        if shop.collection_ids:
            return CollectionScope(collection_ids=frozenset(shop.collection_ids), rule="shop")

        return CollectionScope(collection_ids=None, rule="all")

    def candidate_product_ids(self, scope: CollectionScope) -> set[int]:
        """Collect the product IDs covered by a scope.

        Args:
            scope: Resolved collection scope.

        Returns:
            IDs of existing products in scope.
        """
        if scope.collection_ids is None:
            return set(self.snapshot.products_by_id)

        product_ids: set[int] = set()
        collections = self.snapshot.collections_by_id
        for collection_id in scope.collection_ids:
            collection = collections.get(collection_id)
            if collection is not None:
                product_ids.update(collection.product_ids)

        # Collections may still point at deleted products
        return product_ids & self.snapshot.products_by_id.keys()

    def filter_by_category(self, product_ids: set[int], category_id: int) -> set[int]:
        """Keep products that belong to a category or any of its descendants.

        Args:
            product_ids: Candidate product IDs.
            category_id: Category filter.

        Returns:
            The qualifying subset of ``product_ids``.
        """
        allowed = self.snapshot.category_index.closure(category_id)
        products = self.snapshot.products_by_id
        return {pid for pid in product_ids if not products[pid].category_ids.isdisjoint(allowed)}

    def product_ids(
        self,
        shop: Shop,
        collection_id: int | None = None,
        category_id: int | None = None,
    ) -> list[int]:
        """Resolve the product IDs visible to a shop.

        Args:
            shop: Shop to resolve for.
            collection_id: Optional collection filter (always expanded).
            category_id: Optional category filter.

        Returns:
            Qualifying product IDs in ascending order.
        """
        scope = self.collection_scope(shop, collection_id, include_descendants=True)
        product_ids = self.candidate_product_ids(scope)
        if category_id is not None:
            product_ids = self.filter_by_category(product_ids, category_id)

        logger.debug(
            "Resolved shop products",
            shop_id=shop.id,
            scope_rule=scope.rule,
            collection_id=collection_id,
            category_id=category_id,
            product_count=len(product_ids),
        )
        return sorted(product_ids)

    def products(
        self,
        shop: Shop | None,
        collection_id: int | None = None,
        category_id: int | None = None,
        params: PaginationParams | None = None,
    ) -> PaginatedResult[Product]:
        """Resolve one page of products visible to a shop.

        A missing shop yields an empty page, not an error.

        Args:
            shop: Shop to resolve for, or None if it does not exist.
            collection_id: Optional collection filter.
            category_id: Optional category filter.
            params: Pagination parameters.

        Returns:
            Paginated products ordered by ascending ID.
        """
        params = params or PaginationParams()
        if shop is None:
            return PaginatedResult.empty(params)

        products = self.snapshot.products_by_id
        ordered = [products[pid] for pid in self.product_ids(shop, collection_id, category_id)]
        return paginate(ordered, params)

    def categories(
        self,
        shop: Shop | None,
        collection_id: int | None = None,
        direct_only: bool = False,
    ) -> list[Category]:
        """Resolve the categories used by products visible to a shop.

        A missing shop yields an empty list, not an error.

        Args:
            shop: Shop to resolve for, or None if it does not exist.
            collection_id: Optional collection filter.
            direct_only: Only consider the filter collection itself, not
                its descendants.

        Returns:
            Existing categories referenced by in-scope products, ordered
            by ascending ID.
        """
        if shop is None:
            return []

        scope = self.collection_scope(
            shop, collection_id, include_descendants=not direct_only
        )
        product_ids = self.candidate_product_ids(scope)

        products = self.snapshot.products_by_id
        category_ids: set[int] = set()
        for pid in product_ids:
            category_ids.update(products[pid].category_ids)

        categories = self.snapshot.categories_by_id
        result = [categories[cid] for cid in sorted(category_ids) if cid in categories]

        logger.debug(
            "Resolved shop categories",
            shop_id=shop.id,
            scope_rule=scope.rule,
            collection_id=collection_id,
            direct_only=direct_only,
            category_count=len(result),
        )
        return result
