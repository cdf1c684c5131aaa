"""Catalog service for shop listings and catalog commands.

High-level service that loads snapshots from the repository, runs the
catalog engine over them, and applies catalog commands.
"""

from collections.abc import Iterable
from typing import Annotated

import structlog
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.integrity import DeletionDecision, check_category_deletable
from catalog_api.catalog.membership import MembershipResolver
from catalog_api.catalog.pagination import PaginatedResult, PaginationParams
from catalog_api.catalog.repository import CatalogRepository, SqlCatalogRepository
from catalog_api.catalog.snapshot import CatalogSnapshot
from catalog_api.domain.entities import Category, Collection, Product, Shop
from catalog_api.domain.exceptions import NotFoundError
from catalog_api.infrastructure.database import get_session

logger = structlog.get_logger()


class CatalogService:
    """Service for catalog queries and commands.

    One instance serves one unit of work: every call reads through the
    repository's session. A guarded delete locks out concurrent writers,
    then checks and deletes inside the same transaction.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(SqlCatalogRepository(session))
            page = await service.resolve_shop_products(1, collection_id=2)
            await session.commit()
    """

    def __init__(self, repository: CatalogRepository) -> None:
        """Initialize service with a repository.

        Args:
            repository: Catalog repository bound to the current session.
        """
        self.repository = repository

    async def load_snapshot(self, include_categories: bool = True) -> CatalogSnapshot:
        """Read a catalog snapshot from the repository.

        Args:
            include_categories: Whether to load categories too.

        Returns:
            Snapshot of products, collections and (optionally) categories.
        """
        products = await self.repository.list_products()
        collections = await self.repository.list_collections()
        categories = await self.repository.list_categories() if include_categories else []
        return CatalogSnapshot(
            products=tuple(products),
            categories=tuple(categories),
            collections=tuple(collections),
        )

    # ========================================================================
    # Engine Operations
    # ========================================================================

    async def resolve_shop_products(
        self,
        shop_id: int,
        collection_id: int | None = None,
        category_id: int | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> PaginatedResult[Product]:
        """List one page of the products visible to a shop.

        Args:
            shop_id: Shop ID. A missing shop yields an empty page.
            collection_id: Optional collection filter (includes descendants).
            category_id: Optional category filter (includes descendants).
            page: Page number (1-indexed).
            limit: Items per page.

        Returns:
            Paginated products in ascending ID order.
        """
        params = PaginationParams(page=page, limit=limit)
        shop = await self.repository.get_shop(shop_id)
        if shop is None:
            logger.debug("Shop not found for product listing", shop_id=shop_id)
            return PaginatedResult.empty(params)

        snapshot = await self.load_snapshot(include_categories=category_id is not None)
        return MembershipResolver(snapshot).products(
            shop,
            collection_id=collection_id,
            category_id=category_id,
            params=params,
        )

    async def resolve_shop_categories(
        self,
        shop_id: int,
        collection_id: int | None = None,
        direct_only: bool = False,
    ) -> list[Category]:
        """List the categories used by products visible to a shop.

        Args:
            shop_id: Shop ID. A missing shop yields an empty list.
            collection_id: Optional collection filter.
            direct_only: Ignore descendants of the filter collection.

        Returns:
            Categories in ascending ID order.
        """
        shop = await self.repository.get_shop(shop_id)
        if shop is None:
            logger.debug("Shop not found for category listing", shop_id=shop_id)
            return []

        snapshot = await self.load_snapshot()
        return MembershipResolver(snapshot).categories(
            shop,
            collection_id=collection_id,
            direct_only=direct_only,
        )

    async def check_category_deletable(self, category_id: int) -> DeletionDecision:
        """Decide whether a category and its subtree may be deleted.

        Args:
            category_id: Category to check.

        Returns:
            The deletion decision. Nothing is modified.
        """
        categories = await self.repository.list_categories()
        products = await self.repository.list_products()
        return check_category_deletable(category_id, categories, products)

    async def delete_category(self, category_id: int) -> frozenset[int]:
        """Delete a category together with all of its descendants.

        Writers to categories and product links are locked out first, then
        the check and the delete run in the repository's current
        transaction; the caller commits or rolls back as a whole.

        Args:
            category_id: Category to delete.

        Returns:
            IDs of all deleted categories.

        Raises:
            NotFoundError: If the category does not exist.
            CategoryInUseError: If a product references the category.
            DescendantCategoryInUseError: If a product references a descendant.
        """
        await self.repository.lock_category_references()
        decision = await self.check_category_deletable(category_id)
        error = decision.to_error()
        if error is not None:
            logger.warning(
                "Category deletion refused",
                category_id=category_id,
                reason=decision.blocked.value if decision.blocked else "not_found",
                blocking_category_id=decision.blocking_category_id,
                blocking_product_ids=list(decision.blocking_product_ids),
            )
            raise error

        await self.repository.delete_categories(decision.ids_to_delete)
        logger.info(
            "Category deleted",
            category_id=category_id,
            deleted_ids=sorted(decision.ids_to_delete),
        )
        return decision.ids_to_delete

    # ========================================================================
    # Products
    # ========================================================================

    async def list_products(self) -> list[Product]:
        """Get all products in ascending ID order."""
        return await self.repository.list_products()

    async def create_product(
        self,
        name: str,
        description: str = "",
        price: float = 0.0,
        category_ids: Iterable[int] = (),
    ) -> Product:
        """Create a product."""
        product = await self.repository.create_product(name, description, price, category_ids)
        logger.info("Product created", product_id=product.id)
        return product

    async def update_product(
        self,
        product_id: int,
        name: str,
        description: str = "",
        price: float = 0.0,
        category_ids: Iterable[int] = (),
    ) -> Product:
        """Update a product.

        Raises:
            NotFoundError: If the product does not exist.
        """
        product = await self.repository.update_product(
            product_id, name, description, price, category_ids
        )
        if product is None:
            raise NotFoundError("Product", product_id)
        logger.info("Product updated", product_id=product_id)
        return product

    async def delete_product(self, product_id: int) -> None:
        """Delete a product.

        Raises:
            NotFoundError: If the product does not exist.
        """
        if not await self.repository.delete_product(product_id):
            raise NotFoundError("Product", product_id)
        logger.info("Product deleted", product_id=product_id)

    # ========================================================================
    # Categories
    # ========================================================================

    async def list_categories(self) -> list[Category]:
        """Get all categories in ascending ID order."""
        return await self.repository.list_categories()

    async def create_category(self, name: str, parent_id: int | None = None) -> Category:
        """Create a category."""
        category = await self.repository.create_category(name, parent_id)
        logger.info("Category created", category_id=category.id, parent_id=parent_id)
        return category

    async def update_category(
        self,
        category_id: int,
        name: str,
        parent_id: int | None = None,
    ) -> Category:
        """Update a category.

        Raises:
            NotFoundError: If the category does not exist.
        """
        category = await self.repository.update_category(category_id, name, parent_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        logger.info("Category updated", category_id=category_id, parent_id=parent_id)
        return category

    # ========================================================================
    # Collections
    # ========================================================================

    async def list_collections(self) -> list[Collection]:
        """Get all collections in ascending ID order."""
        return await self.repository.list_collections()

    async def create_collection(
        self,
        name: str,
        parent_id: int | None = None,
        product_ids: Iterable[int] = (),
    ) -> Collection:
        """Create a collection."""
        collection = await self.repository.create_collection(name, parent_id, product_ids)
        logger.info("Collection created", collection_id=collection.id, parent_id=parent_id)
        return collection

    async def update_collection(
        self,
        collection_id: int,
        name: str,
        parent_id: int | None = None,
        product_ids: Iterable[int] = (),
    ) -> Collection:
        """Update a collection.

        Raises:
            NotFoundError: If the collection does not exist.
        """
        collection = await self.repository.update_collection(
            collection_id, name, parent_id, product_ids
        )
        if collection is None:
            raise NotFoundError("Collection", collection_id)
        logger.info("Collection updated", collection_id=collection_id)
        return collection

    async def delete_collection(self, collection_id: int) -> None:
        """Delete a collection.

        Unlike categories there is no integrity check: shops and child
        collections may still reference the deleted collection.

        Raises:
            NotFoundError: If the collection does not exist.
        """
        if not await self.repository.delete_collection(collection_id):
            raise NotFoundError("Collection", collection_id)
        logger.info("Collection deleted", collection_id=collection_id)

    # ========================================================================
    # Shops
    # ========================================================================

    async def list_shops(self) -> list[Shop]:
        """Get all shops in ascending ID order."""
        return await self.repository.list_shops()

    async def get_shop(self, shop_id: int) -> Shop:
        """Get a shop.

        Raises:
            NotFoundError: If the shop does not exist.
        """
        shop = await self.repository.get_shop(shop_id)
        if shop is None:
            raise NotFoundError("Shop", shop_id)
        return shop

    async def create_shop(self, name: str, collection_ids: Iterable[int] = ()) -> Shop:
        """Create a shop."""
        shop = await self.repository.create_shop(name, collection_ids)
        logger.info("Shop created", shop_id=shop.id)
        return shop

    async def update_shop(
        self,
        shop_id: int,
        name: str,
        collection_ids: Iterable[int] = (),
    ) -> Shop:
        """Update a shop.

        Raises:
            NotFoundError: If the shop does not exist.
        """
        shop = await self.repository.update_shop(shop_id, name, collection_ids)
        if shop is None:
            raise NotFoundError("Shop", shop_id)
        logger.info("Shop updated", shop_id=shop_id)
        return shop

    async def delete_shop(self, shop_id: int) -> None:
        """Delete a shop.

        Raises:
            NotFoundError: If the shop does not exist.
        """
        if not await self.repository.delete_shop(shop_id):
            raise NotFoundError("Shop", shop_id)
        logger.info("Shop deleted", shop_id=shop_id)


def get_catalog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to the request's session."""
    return CatalogService(SqlCatalogRepository(session))
