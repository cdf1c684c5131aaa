"""Product API endpoints.

Provides CRUD endpoints for products.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from catalog_api.api.schemas import ErrorResponse, ProductSchema, ProductWriteRequest
from catalog_api.catalog.service import CatalogService, get_catalog_service
from catalog_api.domain.entities import Product

router = APIRouter(prefix="/api/products", tags=["Products"])


# ============================================================================
# Converters
# ============================================================================


def product_to_response(product: Product) -> ProductSchema:
    """Convert Product entity to response schema."""
    return ProductSchema(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        category_ids=sorted(product.category_ids),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=list[ProductSchema],
    summary="List products",
    description="Get all products in ascending ID order.",
)
async def list_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[ProductSchema]:
    """List all products."""
    products = await service.list_products()
    return [product_to_response(p) for p in products]


@router.post(
    "",
    response_model=ProductSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
async def create_product(
    request: ProductWriteRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductSchema:
    """Create a product.

    Category references are not validated; a product may name categories
    that do not exist.
    """
    product = await service.create_product(
        name=request.name,
        description=request.description,
        price=request.price,
        category_ids=request.category_ids,
    )
    return product_to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductSchema,
    responses={404: {"model": ErrorResponse}},
    summary="Update product",
)
async def update_product(
    product_id: int,
    request: ProductWriteRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductSchema:
    """Replace a product's fields and categories."""
    product = await service.update_product(
        product_id,
        name=request.name,
        description=request.description,
        price=request.price,
        category_ids=request.category_ids,
    )
    return product_to_response(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
)
async def delete_product(
    product_id: int,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Response:
    """Delete a product and its category and collection links."""
    await service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
