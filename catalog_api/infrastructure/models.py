"""SQLAlchemy models for database tables.

Provides ORM models for categories, collections, products, shops and the
link tables between them.

Parent references and the category/collection sides of the link tables are
plain integer columns without foreign keys. Category integrity is enforced
by the catalog engine, and collections are deliberately deletable while
still referenced.
"""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text

from catalog_api.infrastructure.database import Base


# ============================================================================
# Category Models
# ============================================================================


class CategoryModel(Base):
    """Category model for database persistence.

    Categories form a forest through ``parent_id``.
    """

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    parent_id = Column(Integer, nullable=True, index=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<CategoryModel(id={self.id}, name={self.name})>"


# ============================================================================
# Collection Models
# ============================================================================


class CollectionModel(Base):
    """Collection model for database persistence."""

    __tablename__ = "collections"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    parent_id = Column(Integer, nullable=True, index=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<CollectionModel(id={self.id}, name={self.name})>"


class CollectionProductModel(Base):
    """Direct assignment of a product to a collection."""

    __tablename__ = "collection_products"

    collection_id = Column(Integer, primary_key=True)
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )


# ============================================================================
# Product Models
# ============================================================================


class ProductModel(Base):
    """Product model for database persistence."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(500), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False, default=0.0)

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductModel(id={self.id}, name={self.name})>"


class ProductCategoryModel(Base):
    """Membership of a product in a category (many-to-many)."""

    __tablename__ = "product_categories"

    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    category_id = Column(Integer, primary_key=True, index=True)


# ============================================================================
# Shop Models
# ============================================================================


class ShopModel(Base):
    """Shop model for database persistence."""

    __tablename__ = "shops"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        """String representation."""
        return f"<ShopModel(id={self.id}, name={self.name})>"


class ShopCollectionModel(Base):
    """Direct association of a collection with a shop."""

    __tablename__ = "shop_collections"

    shop_id = Column(
        Integer,
        ForeignKey("shops.id", ondelete="CASCADE"),
        primary_key=True,
    )
    collection_id = Column(Integer, primary_key=True)
