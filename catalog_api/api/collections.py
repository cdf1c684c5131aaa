"""Collection API endpoints.

Provides CRUD endpoints for collections.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from catalog_api.api.schemas import CollectionSchema, CollectionWriteRequest, ErrorResponse
from catalog_api.catalog.service import CatalogService, get_catalog_service
from catalog_api.domain.entities import Collection

router = APIRouter(prefix="/api/collections", tags=["Collections"])


def collection_to_response(collection: Collection) -> CollectionSchema:
    """Convert Collection entity to response schema."""
    return CollectionSchema(
        id=collection.id,
        name=collection.name,
        parent_id=collection.parent_id,
        product_ids=sorted(collection.product_ids),
    )


@router.get("", response_model=list[CollectionSchema], summary="List collections")
async def list_collections(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[CollectionSchema]:
    """List all collections."""
    collections = await service.list_collections()
    return [collection_to_response(c) for c in collections]


@router.post(
    "",
    response_model=CollectionSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create collection",
)
async def create_collection(
    request: CollectionWriteRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CollectionSchema:
    """Create a collection."""
    collection = await service.create_collection(
        request.name, request.parent_id, request.product_ids
    )
    return collection_to_response(collection)


@router.put(
    "/{collection_id}",
    response_model=CollectionSchema,
    responses={404: {"model": ErrorResponse}},
    summary="Update collection",
)
async def update_collection(
    collection_id: int,
    request: CollectionWriteRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CollectionSchema:
    """Replace a collection's fields and product assignments."""
    collection = await service.update_collection(
        collection_id, request.name, request.parent_id, request.product_ids
    )
    return collection_to_response(collection)


@router.delete(
    "/{collection_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete collection",
)
async def delete_collection(
    collection_id: int,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Response:
    """Delete a collection.

    No integrity check is made: shops and child collections that still
    reference it keep their references.
    """
    await service.delete_collection(collection_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
