"""Image endpoints: feeds, uploads, likes, saves and comments."""

from typing import Annotated

from fastapi import APIRouter, File, Form, Query, UploadFile, status
from pydantic import ValidationError as PydanticValidationError

from pinboard.api.deps import CurrentUserID, ImageServiceDep, OptionalUserID, PaginationDep
from pinboard.core.exceptions import (
    ErrorCode,
    NotFoundError,
    ValidationError,
    pydantic_error_details,
)
from pinboard.repositories.image import ImageSort
from pinboard.schemas.base import ApiResponse, PaginatedResponse, ok
from pinboard.schemas.comment import CommentCreate, CommentRead
from pinboard.schemas.image import (
    ImageCreate,
    ImageRead,
    ImageUpdate,
    LikeState,
    SaveRequest,
    SaveState,
)
from pinboard.utils.uploads import discard_upload, save_upload

router = APIRouter()


def _image_not_found(image_id: int) -> NotFoundError:
    return NotFoundError("Image", image_id, code=ErrorCode.IMAGE_NOT_FOUND)


# ─────────────────────────────────────────────────────────────────────────────
# Feeds
# ─────────────────────────────────────────────────────────────────────────────


@router.get(
    "",
    response_model=ApiResponse[PaginatedResponse[ImageRead]],
    summary="List images",
    description="Get a paginated list of images, newest first, with optional filtering.",
)
async def list_images(
    service: ImageServiceDep,
    viewer_id: OptionalUserID,
    pagination: PaginationDep,
    category: Annotated[
        str | None,
        Query(max_length=50, description="Filter by category"),
    ] = None,
    search: Annotated[
        str | None,
        Query(max_length=100, description="Search in title and description"),
    ] = None,
) -> ApiResponse[PaginatedResponse[ImageRead]]:
    """List images.

    - **category**: Exact category, case-insensitive
    - **search**: Substring of the title or description
    """
    result = await service.list_images(
        page=pagination.page,
        limit=pagination.limit,
        category=category.strip().lower() if category else None,
        search=search or None,
        current_user_id=viewer_id,
    )
    return ok(result)


@router.get(
    "/popular",
    response_model=ApiResponse[PaginatedResponse[ImageRead]],
    summary="List popular images",
    description="Get images ranked by likes and saves.",
)
async def list_popular_images(
    service: ImageServiceDep,
    viewer_id: OptionalUserID,
    pagination: PaginationDep,
    sort: Annotated[
        ImageSort,
        Query(description="Ranking: popular, likes, saves or newest"),
    ] = ImageSort.POPULAR,
) -> ApiResponse[PaginatedResponse[ImageRead]]:
    """List images ranked by engagement. Ties are broken newest first."""
    result = await service.list_popular(
        page=pagination.page,
        limit=pagination.limit,
        current_user_id=viewer_id,
        sort=sort,
    )
    return ok(result)


@router.get(
    "/user/{user_id}",
    response_model=ApiResponse[PaginatedResponse[ImageRead]],
    summary="List a user's images",
    description="Get the images uploaded by one user, newest first.",
)
async def list_user_images(
    user_id: int,
    service: ImageServiceDep,
    viewer_id: OptionalUserID,
    pagination: PaginationDep,
) -> ApiResponse[PaginatedResponse[ImageRead]]:
    """List one user's uploads."""
    result = await service.list_user_images(
        user_id,
        page=pagination.page,
        limit=pagination.limit,
        current_user_id=viewer_id,
    )
    return ok(result)


@router.get(
    "/{image_id}",
    response_model=ApiResponse[ImageRead],
    summary="Get image",
    description="Get a single image by its ID.",
)
async def get_image(
    image_id: int,
    service: ImageServiceDep,
    viewer_id: OptionalUserID,
) -> ApiResponse[ImageRead]:
    """Get an image, with like/save flags when the caller is signed in."""
    image = await service.get_image(image_id, viewer_id)
    if image is None:
        raise _image_not_found(image_id)
    return ok(image)


# ─────────────────────────────────────────────────────────────────────────────
# Create / update / delete
# ─────────────────────────────────────────────────────────────────────────────


@router.post(
    "",
    response_model=ApiResponse[ImageRead],
    status_code=status.HTTP_201_CREATED,
    summary="Upload image",
    description="Upload an image file (field `image` or `file`) with its details.",
)
async def create_image(
    service: ImageServiceDep,
    user_id: CurrentUserID,
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    link: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    collection_id: Annotated[str | None, Form(alias="collectionId")] = None,
    image: Annotated[UploadFile | None, File()] = None,
    file: Annotated[UploadFile | None, File()] = None,
) -> ApiResponse[ImageRead]:
    """Upload a new image.

    - **title**: Up to 100 characters (required)
    - **category**: One of the known categories (required)
    - **description**: Up to 500 characters
    - **link**: Source URL
    - **collectionId**: One of your collections to file the image into
    """
    upload = image if image is not None else file
    if upload is None:
        raise ValidationError(
            "Image file is required",
            code=ErrorCode.INVALID_UPLOAD,
            details=[{"field": "image", "message": "Field required"}],
        )

    # Empty form fields count as absent
    fields = {
        "title": title,
        "description": description,
        "link": link,
        "category": category,
        "collection_id": collection_id,
    }
    try:
        data = ImageCreate.model_validate({k: v for k, v in fields.items() if v})
    except PydanticValidationError as exc:
        raise ValidationError(
            "Request validation failed",
            details=pydantic_error_details(exc.errors(), skip_location=False),
        ) from exc

    url = await save_upload(upload)
    try:
        created = await service.create_image(user_id, url, data)
    except Exception:
        discard_upload(url)
        raise
    if created is None:
        discard_upload(url)
        raise NotFoundError(
            "Collection",
            data.collection_id,
            code=ErrorCode.COLLECTION_NOT_FOUND,
        )

    return ok(created, "Image uploaded successfully")


@router.put(
    "/{image_id}",
    response_model=ApiResponse[ImageRead],
    summary="Update image",
    description="Update an image you uploaded. Only provided fields are changed.",
)
async def update_image(
    image_id: int,
    data: ImageUpdate,
    service: ImageServiceDep,
    user_id: CurrentUserID,
) -> ApiResponse[ImageRead]:
    """Update an image.

    Description and link can be cleared by sending null.
    """
    updated = await service.update_image(image_id, user_id, data)
    if updated is None:
        raise _image_not_found(image_id)
    return ok(updated, "Image updated successfully")


@router.delete(
    "/{image_id}",
    response_model=ApiResponse[None],
    summary="Delete image",
    description="Delete an image you uploaded, with its likes, saves and comments.",
)
async def delete_image(
    image_id: int,
    service: ImageServiceDep,
    user_id: CurrentUserID,
) -> ApiResponse[None]:
    """Delete an image."""
    if not await service.delete_image(image_id, user_id):
        raise _image_not_found(image_id)
    return ok(message="Image deleted successfully")


# ─────────────────────────────────────────────────────────────────────────────
# Likes and saves
# ─────────────────────────────────────────────────────────────────────────────


@router.post(
    "/{image_id}/like",
    response_model=ApiResponse[LikeState],
    summary="Like image",
)
async def like_image(
    image_id: int,
    service: ImageServiceDep,
    user_id: CurrentUserID,
) -> ApiResponse[LikeState]:
    """Like an image. Liking an image twice has no further effect."""
    if not await service.like_image(image_id, user_id):
        raise _image_not_found(image_id)

    image = await service.get_image(image_id, user_id)
    if image is None:
        raise _image_not_found(image_id)
    return ok(LikeState(liked=True, likes=image.likes))


@router.post(
    "/{image_id}/unlike",
    response_model=ApiResponse[LikeState],
    summary="Unlike image",
)
async def unlike_image(
    image_id: int,
    service: ImageServiceDep,
    user_id: CurrentUserID,
) -> ApiResponse[LikeState]:
    """Remove your like from an image. Unliking twice has no further effect."""
    await service.unlike_image(image_id, user_id)

    image = await service.get_image(image_id, user_id)
    if image is None:
        raise _image_not_found(image_id)
    return ok(LikeState(liked=False, likes=image.likes))


@router.post(
    "/{image_id}/save",
    response_model=ApiResponse[SaveState],
    summary="Save image",
    description="Save an image into one of your collections.",
)
async def save_image(
    image_id: int,
    data: SaveRequest,
    service: ImageServiceDep,
    user_id: CurrentUserID,
) -> ApiResponse[SaveState]:
    """Save an image.

    Saving an image you already saved moves it to the given collection.
    """
    if not await service.save_image(image_id, user_id, data.collection_id):
        raise NotFoundError("Image or collection")

    image = await service.get_image(image_id, user_id)
    if image is None:
        raise _image_not_found(image_id)
    return ok(SaveState(saved=True, saves=image.saves))


@router.post(
    "/{image_id}/unsave",
    response_model=ApiResponse[SaveState],
    summary="Unsave image",
)
async def unsave_image(
    image_id: int,
    service: ImageServiceDep,
    user_id: CurrentUserID,
) -> ApiResponse[SaveState]:
    """Remove an image from your collections."""
    await service.unsave_image(image_id, user_id)

    image = await service.get_image(image_id, user_id)
    if image is None:
        raise _image_not_found(image_id)
    return ok(SaveState(saved=False, saves=image.saves))


# ─────────────────────────────────────────────────────────────────────────────
# Comments
# ─────────────────────────────────────────────────────────────────────────────


@router.get(
    "/{image_id}/comments",
    response_model=ApiResponse[list[CommentRead]],
    summary="List comments",
)
async def get_comments(
    image_id: int,
    service: ImageServiceDep,
) -> ApiResponse[list[CommentRead]]:
    """Get an image's comments, newest first."""
    comments = await service.get_comments(image_id)
    if comments is None:
        raise _image_not_found(image_id)
    return ok(comments)


@router.post(
    "/{image_id}/comments",
    response_model=ApiResponse[CommentRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add comment",
)
async def add_comment(
    image_id: int,
    data: CommentCreate,
    service: ImageServiceDep,
    user_id: CurrentUserID,
) -> ApiResponse[CommentRead]:
    """Post a comment on an image."""
    comment = await service.add_comment(image_id, user_id, data.content)
    if comment is None:
        raise _image_not_found(image_id)
    return ok(comment, "Comment added successfully")


@router.delete(
    "/{image_id}/comments/{comment_id}",
    response_model=ApiResponse[None],
    summary="Delete comment",
)
async def delete_comment(
    image_id: int,
    comment_id: int,
    service: ImageServiceDep,
    user_id: CurrentUserID,
) -> ApiResponse[None]:
    """Delete one of your own comments."""
    if not await service.delete_comment(image_id, comment_id, user_id):
        raise NotFoundError("Comment", comment_id, code=ErrorCode.COMMENT_NOT_FOUND)
    return ok(message="Comment deleted successfully")
