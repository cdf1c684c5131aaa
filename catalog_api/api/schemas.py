"""API schemas for the catalog API.

Pydantic models for request/response validation and serialization.
JSON field names are camelCase for compatibility with existing clients.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CamelModel(BaseModel):
    """Base model accepting both snake_case names and camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Category Schemas
# ============================================================================


class CategorySchema(CamelModel):
    """Category representation."""

    id: int = Field(..., description="Category identifier")
    name: str = Field(..., description="Category name")
    parent_id: int | None = Field(
        default=None, alias="parentId", description="Parent category (null for a root)"
    )


class CategoryWriteRequest(CamelModel):
    """Request to create or update a category."""

    name: str = Field(..., description="Category name")
    parent_id: int | None = Field(default=None, alias="parentId", description="Parent category")


class CategoryDeletableResponse(CamelModel):
    """Result of a category deletion check."""

    ok: bool = Field(..., description="Whether the category may be deleted")
    ids_to_delete: list[int] = Field(
        default_factory=list,
        alias="idsToDelete",
        description="Category IDs that would be removed together",
    )
    blocked: str | None = Field(
        default=None, description="Block reason: 'self' or 'descendant'"
    )
    not_found: bool = Field(default=False, alias="notFound", description="Category is missing")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSchema(CamelModel):
    """Product representation."""

    id: int = Field(..., description="Product identifier")
    name: str = Field(..., description="Product name")
    description: str = Field(default="", description="Product description")
    price: float = Field(default=0.0, description="Product price")
    category_ids: list[int] = Field(
        default_factory=list, alias="categoryIds", description="Categories of the product"
    )


class ProductWriteRequest(CamelModel):
    """Request to create or update a product."""

    name: str = Field(..., description="Product name")
    description: str = Field(default="", description="Product description")
    price: float = Field(default=0.0, description="Product price")
    category_ids: list[int] = Field(
        default_factory=list, alias="categoryIds", description="Categories of the product"
    )

    @field_validator("category_ids", mode="before")
    @classmethod
    def empty_list_for_null(cls, value: list[int] | None) -> list[int]:
        """Treat an explicit null as an empty list."""
        return [] if value is None else value


class PaginatedProductsResponse(CamelModel):
    """One page of a shop's products."""

    products: list[ProductSchema] = Field(..., description="Products on this page")
    page: int = Field(..., description="Current page number")
    limit: int = Field(..., description="Items per page")
    total_count: int = Field(..., alias="totalCount", description="Total matching products")
    total_pages: int = Field(..., alias="totalPages", description="Total number of pages")


# ============================================================================
# Collection Schemas
# ============================================================================


class CollectionSchema(CamelModel):
    """Collection representation."""

    id: int = Field(..., description="Collection identifier")
    name: str = Field(..., description="Collection name")
    parent_id: int | None = Field(
        default=None, alias="parentId", description="Parent collection (null for a root)"
    )
    product_ids: list[int] = Field(
        default_factory=list,
        alias="productIds",
        description="Products directly assigned to the collection",
    )


class CollectionWriteRequest(CamelModel):
    """Request to create or update a collection."""

    name: str = Field(..., description="Collection name")
    parent_id: int | None = Field(default=None, alias="parentId", description="Parent collection")
    product_ids: list[int] = Field(
        default_factory=list, alias="productIds", description="Directly assigned products"
    )

    @field_validator("product_ids", mode="before")
    @classmethod
    def empty_list_for_null(cls, value: list[int] | None) -> list[int]:
        """Treat an explicit null as an empty list."""
        return [] if value is None else value


# ============================================================================
# Shop Schemas
# ============================================================================


class ShopSchema(CamelModel):
    """Shop representation."""

    id: int = Field(..., description="Shop identifier")
    name: str = Field(..., description="Shop name")
    collection_ids: list[int] = Field(
        default_factory=list,
        alias="collectionIds",
        description="Collections directly associated with the shop",
    )


class ShopWriteRequest(CamelModel):
    """Request to create or update a shop."""

    name: str = Field(..., description="Shop name")
    collection_ids: list[int] = Field(
        default_factory=list, alias="collectionIds", description="Associated collections"
    )

    @field_validator("collection_ids", mode="before")
    @classmethod
    def empty_list_for_null(cls, value: list[int] | None) -> list[int]:
        """Treat an explicit null as an empty list."""
        return [] if value is None else value
