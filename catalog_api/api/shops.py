"""Shop API endpoints.

Provides CRUD endpoints for shops and the shop-scoped product and
category listings.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from catalog_api.api.categories import category_to_response
from catalog_api.api.params import flag, optional_int, positive_int
from catalog_api.api.products import product_to_response
from catalog_api.api.schemas import (
    CategorySchema,
    ErrorResponse,
    PaginatedProductsResponse,
    ShopSchema,
    ShopWriteRequest,
)
from catalog_api.catalog.service import CatalogService, get_catalog_service
from catalog_api.domain.entities import Shop
from catalog_api.infrastructure.config import settings

router = APIRouter(prefix="/api/shops", tags=["Shops"])


# ============================================================================
# Converters
# ============================================================================


def shop_to_response(shop: Shop) -> ShopSchema:
    """Convert Shop entity to response schema."""
    return ShopSchema(id=shop.id, name=shop.name, collection_ids=sorted(shop.collection_ids))


# ============================================================================
# Endpoints
# ============================================================================


@router.get("", response_model=list[ShopSchema], summary="List shops")
async def list_shops(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[ShopSchema]:
    """List all shops."""
    shops = await service.list_shops()
    return [shop_to_response(s) for s in shops]


@router.post(
    "",
    response_model=ShopSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create shop",
)
async def create_shop(
    request: ShopWriteRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ShopSchema:
    """Create a shop."""
    shop = await service.create_shop(request.name, request.collection_ids)
    return shop_to_response(shop)


@router.get(
    "/{shop_id}",
    response_model=ShopSchema,
    responses={404: {"model": ErrorResponse}},
    summary="Get shop",
)
async def get_shop(
    shop_id: int,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ShopSchema:
    """Get a shop by ID."""
    shop = await service.get_shop(shop_id)
    return shop_to_response(shop)


@router.put(
    "/{shop_id}",
    response_model=ShopSchema,
    responses={404: {"model": ErrorResponse}},
    summary="Update shop",
)
async def update_shop(
    shop_id: int,
    request: ShopWriteRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ShopSchema:
    """Replace a shop's name and collections."""
    shop = await service.update_shop(shop_id, request.name, request.collection_ids)
    return shop_to_response(shop)


@router.delete(
    "/{shop_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete shop",
)
async def delete_shop(
    shop_id: int,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Response:
    """Delete a shop."""
    await service.delete_shop(shop_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{shop_id}/products",
    response_model=PaginatedProductsResponse,
    summary="List shop products",
    description=(
        "Get one page of the products visible to a shop, optionally scoped "
        "to a collection (with its descendants) and a category (with its "
        "descendants). An unknown shop yields an empty page."
    ),
)
async def list_shop_products(
    shop_id: int,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    collection: Annotated[str | None, Query(description="Collection filter")] = None,
    category: Annotated[str | None, Query(description="Category filter")] = None,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Items per page")] = None,
) -> PaginatedProductsResponse:
    """List the products visible to a shop."""
    result = await service.resolve_shop_products(
        shop_id,
        collection_id=optional_int(collection),
        category_id=optional_int(category),
        page=positive_int(page, 1),
        limit=positive_int(limit, settings.default_page_limit),
    )
    return PaginatedProductsResponse(
        products=[product_to_response(p) for p in result.items],
        page=result.page,
        limit=result.limit,
        total_count=result.total_count,
        total_pages=result.total_pages,
    )


@router.get(
    "/{shop_id}/categories",
    response_model=list[CategorySchema],
    summary="List shop categories",
    description=(
        "Get the categories of the products visible to a shop. With "
        "direct=true only the filter collection itself is considered, not "
        "its descendants. An unknown shop yields an empty list."
    ),
)
async def list_shop_categories(
    shop_id: int,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    collection: Annotated[str | None, Query(description="Collection filter")] = None,
    direct: Annotated[str | None, Query(description="Only the filter collection itself")] = None,
) -> list[CategorySchema]:
    """List the categories used by a shop's products."""
    categories = await service.resolve_shop_categories(
        shop_id,
        collection_id=optional_int(collection),
        direct_only=flag(direct),
    )
    return [category_to_response(c) for c in categories]
