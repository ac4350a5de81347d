"""Collection endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from pinboard.api.deps import (
    CollectionServiceDep,
    CurrentUserID,
    OptionalUserID,
    PaginationDep,
)
from pinboard.core.exceptions import ErrorCode, NotFoundError
from pinboard.schemas.base import ApiResponse, PaginatedResponse, ok
from pinboard.schemas.collection import CollectionCreate, CollectionRead, CollectionUpdate
from pinboard.schemas.image import ImageRead

router = APIRouter()


def _collection_not_found(collection_id: int) -> NotFoundError:
    return NotFoundError("Collection", collection_id, code=ErrorCode.COLLECTION_NOT_FOUND)


@router.get(
    "",
    response_model=ApiResponse[PaginatedResponse[CollectionRead]],
    summary="List collections",
    description="Get a paginated list of collections, newest first.",
)
async def list_collections(
    service: CollectionServiceDep,
    pagination: PaginationDep,
    user_id: Annotated[
        int | None,
        Query(alias="userId", ge=1, description="Only this user's collections"),
    ] = None,
) -> ApiResponse[PaginatedResponse[CollectionRead]]:
    """List collections.

    - **userId**: Restrict to one owner
    """
    result = await service.list_collections(
        page=pagination.page,
        limit=pagination.limit,
        user_id=user_id,
    )
    return ok(result)


@router.get(
    "/user/{user_id}",
    response_model=ApiResponse[list[CollectionRead]],
    summary="List a user's collections",
    description="Get every collection owned by one user, newest first.",
)
async def list_user_collections(
    user_id: int,
    service: CollectionServiceDep,
) -> ApiResponse[list[CollectionRead]]:
    """List one user's collections."""
    return ok(await service.list_user_collections(user_id))


@router.get(
    "/{collection_id}",
    response_model=ApiResponse[CollectionRead],
    summary="Get collection",
    description="Get a collection by its ID.",
)
async def get_collection(
    collection_id: int,
    service: CollectionServiceDep,
) -> ApiResponse[CollectionRead]:
    """Get a collection with its image count and cover image."""
    collection = await service.get_collection(collection_id)
    if collection is None:
        raise _collection_not_found(collection_id)
    return ok(collection)


@router.get(
    "/{collection_id}/images",
    response_model=ApiResponse[list[ImageRead]],
    summary="List collection images",
    description="Get the images filed or saved into a collection, newest first.",
)
async def get_collection_images(
    collection_id: int,
    service: CollectionServiceDep,
    viewer_id: OptionalUserID,
) -> ApiResponse[list[ImageRead]]:
    """List the images in a collection."""
    images = await service.get_collection_images(collection_id, viewer_id)
    if images is None:
        raise _collection_not_found(collection_id)
    return ok(images)


@router.post(
    "",
    response_model=ApiResponse[CollectionRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create collection",
    description="Create a new collection for organizing images.",
)
async def create_collection(
    data: CollectionCreate,
    service: CollectionServiceDep,
    user_id: CurrentUserID,
) -> ApiResponse[CollectionRead]:
    """Create a new collection.

    - **name**: Collection name (required, need not be unique)
    - **description**: Optional description
    - **category**: Optional category
    """
    collection = await service.create_collection(user_id, data)
    return ok(collection, "Collection created successfully")


@router.put(
    "/{collection_id}",
    response_model=ApiResponse[CollectionRead],
    summary="Update collection",
    description="Update a collection you own. Only provided fields are changed.",
)
async def update_collection(
    collection_id: int,
    data: CollectionUpdate,
    service: CollectionServiceDep,
    user_id: CurrentUserID,
) -> ApiResponse[CollectionRead]:
    """Update a collection."""
    collection = await service.update_collection(collection_id, user_id, data)
    if collection is None:
        raise _collection_not_found(collection_id)
    return ok(collection, "Collection updated successfully")


@router.delete(
    "/{collection_id}",
    response_model=ApiResponse[None],
    summary="Delete collection",
    description="Delete a collection you own. Its images are kept.",
)
async def delete_collection(
    collection_id: int,
    service: CollectionServiceDep,
    user_id: CurrentUserID,
) -> ApiResponse[None]:
    """Delete a collection.

    Images in the collection are NOT deleted, only unlinked. Saves into
    the collection are removed.
    """
    if not await service.delete_collection(collection_id, user_id):
        raise _collection_not_found(collection_id)
    return ok(message="Collection deleted successfully")
