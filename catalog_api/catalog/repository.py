"""Catalog repository for database operations.

Provides flat read access to catalog entities for the engine, the
transactional category delete, and CRUD commands for the HTTP layer.
"""

from collections.abc import Iterable
from typing import Protocol

from sqlalchemy import delete, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.domain.entities import Category, Collection, Product, Shop
from catalog_api.domain.exceptions import RepositoryError
from catalog_api.infrastructure.models import (
    CategoryModel,
    CollectionModel,
    CollectionProductModel,
    ProductCategoryModel,
    ProductModel,
    ShopCollectionModel,
    ShopModel,
)


class CatalogRepository(Protocol):
    """Storage operations the catalog service depends on."""

    async def list_products(self) -> list[Product]: ...

    async def create_product(
        self,
        name: str,
        description: str = "",
        price: float = 0.0,
        category_ids: Iterable[int] = (),
    ) -> Product: ...

    async def update_product(
        self,
        product_id: int,
        name: str,
        description: str = "",
        price: float = 0.0,
        category_ids: Iterable[int] = (),
    ) -> Product | None: ...

    async def delete_product(self, product_id: int) -> bool: ...

    async def list_categories(self) -> list[Category]: ...

    async def create_category(self, name: str, parent_id: int | None = None) -> Category: ...

    async def update_category(
        self, category_id: int, name: str, parent_id: int | None = None
    ) -> Category | None: ...

    async def lock_category_references(self) -> None: ...

    async def delete_categories(self, category_ids: Iterable[int]) -> int: ...

    async def list_collections(self) -> list[Collection]: ...

    async def create_collection(
        self,
        name: str,
        parent_id: int | None = None,
        product_ids: Iterable[int] = (),
    ) -> Collection: ...

    async def update_collection(
        self,
        collection_id: int,
        name: str,
        parent_id: int | None = None,
        product_ids: Iterable[int] = (),
    ) -> Collection | None: ...

    async def delete_collection(self, collection_id: int) -> bool: ...

    async def list_shops(self) -> list[Shop]: ...

    async def get_shop(self, shop_id: int) -> Shop | None: ...

    async def create_shop(self, name: str, collection_ids: Iterable[int] = ()) -> Shop: ...

    async def update_shop(
        self, shop_id: int, name: str, collection_ids: Iterable[int] = ()
    ) -> Shop | None: ...

    async def delete_shop(self, shop_id: int) -> bool: ...


class SqlCatalogRepository:
    """SQLAlchemy implementation of the catalog repository.

    All methods run inside the caller's session transaction; nothing is
    committed here.

    Example usage:
        async with async_session_factory() as session:
            repo = SqlCatalogRepository(session)
            products = await repo.list_products()
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def list_products(self) -> list[Product]:
        """Get all products ordered by ID.

        Returns:
            List of products with their category IDs.
        """
        result = await self.session.execute(select(ProductModel).order_by(ProductModel.id))
        links = await self._links(ProductCategoryModel.product_id, ProductCategoryModel.category_id)
        return [self._to_product(row, links.get(row.id, ())) for row in result.scalars()]

    async def create_product(
        self,
        name: str,
        description: str = "",
        price: float = 0.0,
        category_ids: Iterable[int] = (),
    ) -> Product:
        """Create a product.

        Args:
            name: Product name.
            description: Product description.
            price: Product price.
            category_ids: Categories the product belongs to.

        Returns:
            Created product.
        """
        model = ProductModel(name=name, description=description, price=price)
        self.session.add(model)
        await self.session.flush()

        category_ids = frozenset(category_ids)
        self.session.add_all(
            ProductCategoryModel(product_id=model.id, category_id=cid) for cid in category_ids
        )
        await self.session.flush()
        return self._to_product(model, category_ids)

    async def update_product(
        self,
        product_id: int,
        name: str,
        description: str = "",
        price: float = 0.0,
        category_ids: Iterable[int] = (),
    ) -> Product | None:
        """Replace a product's fields and category memberships.

        Returns:
            Updated product, or None if it does not exist.
        """
        model = await self.session.get(ProductModel, product_id)
        if model is None:
            return None

        model.name = name
        model.description = description
        model.price = price

        category_ids = frozenset(category_ids)
        await self.session.execute(
            delete(ProductCategoryModel).where(ProductCategoryModel.product_id == product_id)
        )
        self.session.add_all(
            ProductCategoryModel(product_id=product_id, category_id=cid) for cid in category_ids
        )
        await self.session.flush()
        return self._to_product(model, category_ids)

    async def delete_product(self, product_id: int) -> bool:
        """Delete a product and its category and collection links.

        Returns:
            True if the product existed.
        """
        await self.session.execute(
            delete(ProductCategoryModel).where(ProductCategoryModel.product_id == product_id)
        )
        await self.session.execute(
            delete(CollectionProductModel).where(CollectionProductModel.product_id == product_id)
        )
        result = await self.session.execute(delete(ProductModel).where(ProductModel.id == product_id))
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def list_categories(self) -> list[Category]:
        """Get all categories ordered by ID."""
        result = await self.session.execute(select(CategoryModel).order_by(CategoryModel.id))
        return [self._to_category(row) for row in result.scalars()]

    async def create_category(self, name: str, parent_id: int | None = None) -> Category:
        """Create a category."""
        model = CategoryModel(name=name, parent_id=parent_id)
        self.session.add(model)
        await self.session.flush()
        return self._to_category(model)

    async def update_category(
        self,
        category_id: int,
        name: str,
        parent_id: int | None = None,
    ) -> Category | None:
        """Rename or re-parent a category.

        Returns:
            Updated category, or None if it does not exist.
        """
        model = await self.session.get(CategoryModel, category_id)
        if model is None:
            return None
        model.name = name
        model.parent_id = parent_id
        await self.session.flush()
        return self._to_category(model)

    async def lock_category_references(self) -> None:
        """Block concurrent writers to categories and product links.

        Must run before the integrity check of a guarded delete. SQLite
        transactions already start with the write lock held (see
        ``install_sqlite_locking``); PostgreSQL takes a table lock that
        conflicts with every insert, update and delete until commit.
        """
        connection = await self.session.connection()
        if connection.dialect.name == "postgresql":
            await self.session.execute(
                text(
                    "LOCK TABLE categories, product_categories "
                    "IN SHARE ROW EXCLUSIVE MODE"
                )
            )

    async def delete_categories(self, category_ids: Iterable[int]) -> int:
        """Delete a set of categories in a single statement.

        Must be called with exactly the ID set approved by the integrity
        guard, inside the same transaction that ran the check.

        Args:
            category_ids: Categories to delete.

        Returns:
            Number of deleted rows.

        Raises:
            RepositoryError: If some of the categories were already gone.
        """
        ids = sorted(set(category_ids))
        if not ids:
            return 0

        result = await self.session.execute(
            delete(CategoryModel).where(CategoryModel.id.in_(ids))
        )
        if result.rowcount != len(ids):
            raise RepositoryError(
                "Category set changed during deletion",
                details={"expected": len(ids), "deleted": result.rowcount},
            )
        return result.rowcount

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    async def list_collections(self) -> list[Collection]:
        """Get all collections ordered by ID, with direct product IDs."""
        result = await self.session.execute(select(CollectionModel).order_by(CollectionModel.id))
        links = await self._links(
            CollectionProductModel.collection_id, CollectionProductModel.product_id
        )
        return [self._to_collection(row, links.get(row.id, ())) for row in result.scalars()]

    async def create_collection(
        self,
        name: str,
        parent_id: int | None = None,
        product_ids: Iterable[int] = (),
    ) -> Collection:
        """Create a collection with its direct product assignments."""
        model = CollectionModel(name=name, parent_id=parent_id)
        self.session.add(model)
        await self.session.flush()

        product_ids = frozenset(product_ids)
        self.session.add_all(
            CollectionProductModel(collection_id=model.id, product_id=pid) for pid in product_ids
        )
        await self.session.flush()
        return self._to_collection(model, product_ids)

    async def update_collection(
        self,
        collection_id: int,
        name: str,
        parent_id: int | None = None,
        product_ids: Iterable[int] = (),
    ) -> Collection | None:
        """Replace a collection's fields and direct product assignments.

        Returns:
            Updated collection, or None if it does not exist.
        """
        model = await self.session.get(CollectionModel, collection_id)
        if model is None:
            return None

        model.name = name
        model.parent_id = parent_id

        product_ids = frozenset(product_ids)
        await self.session.execute(
            delete(CollectionProductModel).where(
                CollectionProductModel.collection_id == collection_id
            )
        )
        self.session.add_all(
            CollectionProductModel(collection_id=collection_id, product_id=pid)
            for pid in product_ids
        )
        await self.session.flush()
        return self._to_collection(model, product_ids)

    async def delete_collection(self, collection_id: int) -> bool:
        """Delete a collection and its product assignments.

        Shops and child collections referencing it are left untouched.

        Returns:
            True if the collection existed.
        """
        await self.session.execute(
            delete(CollectionProductModel).where(
                CollectionProductModel.collection_id == collection_id
            )
        )
        result = await self.session.execute(
            delete(CollectionModel).where(CollectionModel.id == collection_id)
        )
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Shops
    # ------------------------------------------------------------------

    async def list_shops(self) -> list[Shop]:
        """Get all shops ordered by ID."""
        result = await self.session.execute(select(ShopModel).order_by(ShopModel.id))
        links = await self._links(ShopCollectionModel.shop_id, ShopCollectionModel.collection_id)
        return [self._to_shop(row, links.get(row.id, ())) for row in result.scalars()]

    async def get_shop(self, shop_id: int) -> Shop | None:
        """Get shop by ID."""
        model = await self.session.get(ShopModel, shop_id)
        if model is None:
            return None
        collection_ids = await self._linked_ids(
            ShopCollectionModel.collection_id,
            ShopCollectionModel.shop_id == shop_id,
        )
        return self._to_shop(model, collection_ids)

    async def create_shop(self, name: str, collection_ids: Iterable[int] = ()) -> Shop:
        """Create a shop with its collection associations."""
        model = ShopModel(name=name)
        self.session.add(model)
        await self.session.flush()

        collection_ids = frozenset(collection_ids)
        self.session.add_all(
            ShopCollectionModel(shop_id=model.id, collection_id=cid) for cid in collection_ids
        )
        await self.session.flush()
        return self._to_shop(model, collection_ids)

    async def update_shop(
        self,
        shop_id: int,
        name: str,
        collection_ids: Iterable[int] = (),
    ) -> Shop | None:
        """Replace a shop's name and collection associations.

        Returns:
            Updated shop, or None if it does not exist.
        """
        model = await self.session.get(ShopModel, shop_id)
        if model is None:
            return None

        model.name = name

        collection_ids = frozenset(collection_ids)
        await self.session.execute(
            delete(ShopCollectionModel).where(ShopCollectionModel.shop_id == shop_id)
        )
        self.session.add_all(
            ShopCollectionModel(shop_id=shop_id, collection_id=cid) for cid in collection_ids
        )
        await self.session.flush()
        return self._to_shop(model, collection_ids)

    async def delete_shop(self, shop_id: int) -> bool:
        """Delete a shop and its collection associations.

        Returns:
            True if the shop existed.
        """
        await self.session.execute(
            delete(ShopCollectionModel).where(ShopCollectionModel.shop_id == shop_id)
        )
        result = await self.session.execute(delete(ShopModel).where(ShopModel.id == shop_id))
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _links(self, owner_column, target_column) -> dict[int, set[int]]:
        """Load a whole link table as owner ID -> set of target IDs."""
        result = await self.session.execute(select(owner_column, target_column))
        links: dict[int, set[int]] = {}
        for owner_id, target_id in result.all():
            links.setdefault(owner_id, set()).add(target_id)
        return links

    async def _linked_ids(self, target_column, condition) -> frozenset[int]:
        """Load the target IDs of one owner from a link table."""
        result = await self.session.execute(select(target_column).where(condition))
        return frozenset(result.scalars().all())

    @staticmethod
    def _to_product(model: ProductModel, category_ids: Iterable[int]) -> Product:
        return Product(
            id=model.id,
            name=model.name,
            description=model.description or "",
            price=float(model.price or 0.0),
            category_ids=frozenset(category_ids),
        )

    @staticmethod
    def _to_category(model: CategoryModel) -> Category:
        return Category(id=model.id, name=model.name, parent_id=model.parent_id)

    @staticmethod
    def _to_collection(model: CollectionModel, product_ids: Iterable[int]) -> Collection:
        return Collection(
            id=model.id,
            name=model.name,
            parent_id=model.parent_id,
            product_ids=frozenset(product_ids),
        )

    @staticmethod
    def _to_shop(model: ShopModel, collection_ids: Iterable[int]) -> Shop:
        return Shop(id=model.id, name=model.name, collection_ids=frozenset(collection_ids))
