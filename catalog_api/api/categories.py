"""Category API endpoints.

Provides CRUD endpoints for categories. Deletion removes the whole
subtree and is refused while any product references a category in it.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from catalog_api.api.schemas import (
    CategoryDeletableResponse,
    CategorySchema,
    CategoryWriteRequest,
    ErrorResponse,
)
from catalog_api.catalog.integrity import DeletionDecision
from catalog_api.catalog.service import CatalogService, get_catalog_service
from catalog_api.domain.entities import Category

router = APIRouter(prefix="/api/categories", tags=["Categories"])


# ============================================================================
# Converters
# ============================================================================


def category_to_response(category: Category) -> CategorySchema:
    """Convert Category entity to response schema."""
    return CategorySchema(id=category.id, name=category.name, parent_id=category.parent_id)


def decision_to_response(decision: DeletionDecision) -> CategoryDeletableResponse:
    """Convert a deletion decision to response schema."""
    return CategoryDeletableResponse(
        ok=decision.ok,
        ids_to_delete=sorted(decision.ids_to_delete),
        blocked=decision.blocked.value if decision.blocked else None,
        not_found=decision.not_found,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=list[CategorySchema],
    summary="List categories",
    description="Get all categories in ascending ID order.",
)
async def list_categories(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[CategorySchema]:
    """List all categories."""
    categories = await service.list_categories()
    return [category_to_response(c) for c in categories]


@router.post(
    "",
    response_model=CategorySchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
async def create_category(
    request: CategoryWriteRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CategorySchema:
    """Create a category."""
    category = await service.create_category(request.name, request.parent_id)
    return category_to_response(category)


@router.put(
    "/{category_id}",
    response_model=CategorySchema,
    responses={404: {"model": ErrorResponse}},
    summary="Update category",
)
async def update_category(
    category_id: int,
    request: CategoryWriteRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CategorySchema:
    """Rename or re-parent a category."""
    category = await service.update_category(category_id, request.name, request.parent_id)
    return category_to_response(category)


@router.get(
    "/{category_id}/deletable",
    response_model=CategoryDeletableResponse,
    summary="Check category deletion",
    description="Report whether a category subtree could be deleted, without deleting it.",
)
async def check_category_deletable(
    category_id: int,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CategoryDeletableResponse:
    """Run the deletion check for a category."""
    decision = await service.check_category_deletable(category_id)
    return decision_to_response(decision)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Delete category",
    description="Delete a category and all of its descendants.",
)
async def delete_category(
    category_id: int,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Response:
    """Delete a category subtree.

    Returns 409 when a product references the category or any of its
    descendants; nothing is deleted in that case.
    """
    await service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
