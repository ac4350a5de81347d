"""Image service: feeds, uploads, likes, saves and comments."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.models.image import Image
from pinboard.repositories.collection import CollectionRepository
from pinboard.repositories.comment import CommentRepository
from pinboard.repositories.image import ImageRepository, ImageSort
from pinboard.repositories.like import LikeRepository
from pinboard.repositories.save import SaveRepository
from pinboard.schemas.base import PaginatedResponse
from pinboard.schemas.comment import CommentRead
from pinboard.schemas.image import ImageCreate, ImageRead, ImageUpdate
from pinboard.utils.pagination import offset

logger = logging.getLogger(__name__)

# Fields that may be changed but never cleared
_REQUIRED_FIELDS = ("title", "category")


class ImageService:
    """Service for image business logic.

    Lookups that find nothing, and mutations attempted by someone other
    than the owner, return None or False instead of raising.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async database session.
        """
        self.session = session
        self.repository = ImageRepository(session)
        self.collection_repository = CollectionRepository(session)
        self.comment_repository = CommentRepository(session)
        self.like_repository = LikeRepository(session)
        self.save_repository = SaveRepository(session)

    # ─────────────────────────────────────────────────────────────────────
    # Feeds
    # ─────────────────────────────────────────────────────────────────────

    async def list_images(
        self,
        page: int,
        limit: int,
        category: str | None = None,
        search: str | None = None,
        current_user_id: int | None = None,
    ) -> PaginatedResponse[ImageRead]:
        """List images newest first with optional filters.

        Args:
            page: Page number (1-indexed).
            limit: Items per page.
            category: Exact category to filter by.
            search: Substring of the title or description.
            current_user_id: Viewer, for is_liked / is_saved.

        Returns:
            Paginated list of images.
        """
        images = await self.repository.list_images(
            offset=offset(page, limit),
            limit=limit,
            category=category,
            search=search,
        )
        total = await self.repository.count_images(category=category, search=search)
        return await self._page(images, total, page, limit, current_user_id)

    async def list_popular(
        self,
        page: int,
        limit: int,
        current_user_id: int | None = None,
        sort: ImageSort = ImageSort.POPULAR,
    ) -> PaginatedResponse[ImageRead]:
        """List images ranked by engagement.

        ``popular`` ranks by likes + saves, ``likes`` and ``saves`` by the
        single counter. Ties fall back to newest first.
        """
        images = await self.repository.list_images(
            offset=offset(page, limit),
            limit=limit,
            sort=sort,
        )
        total = await self.repository.count_images()
        return await self._page(images, total, page, limit, current_user_id)

    async def list_user_images(
        self,
        user_id: int,
        page: int,
        limit: int,
        current_user_id: int | None = None,
    ) -> PaginatedResponse[ImageRead]:
        """List one user's uploads, newest first."""
        images = await self.repository.list_images(
            offset=offset(page, limit),
            limit=limit,
            user_id=user_id,
        )
        total = await self.repository.count_images(user_id=user_id)
        return await self._page(images, total, page, limit, current_user_id)

    async def get_image(
        self,
        image_id: int,
        current_user_id: int | None = None,
    ) -> ImageRead | None:
        """Get a single image as seen by the viewer."""
        image = await self.repository.get_by_id(image_id)
        if image is None:
            return None
        return await self.to_read(image, current_user_id)

    # ─────────────────────────────────────────────────────────────────────
    # Create / update / delete
    # ─────────────────────────────────────────────────────────────────────

    async def create_image(
        self,
        user_id: int,
        url: str,
        data: ImageCreate,
    ) -> ImageRead | None:
        """Create an image record for an already stored file.

        Args:
            user_id: Uploader's id.
            url: Public URL of the stored file.
            data: Validated form fields.

        Returns:
            The created image, or None if ``data.collection_id`` names a
            collection the uploader does not own.
        """
        if data.collection_id is not None:
            collection = await self.collection_repository.get_owned(data.collection_id, user_id)
            if collection is None:
                return None

        image = await self.repository.create(
            url=url,
            title=data.title,
            description=data.description,
            link=data.link,
            category=data.category.value,
            user_id=user_id,
            collection_id=data.collection_id,
            likes=0,
            saves=0,
        )
        logger.info("Image created", extra={"image_id": image.id, "user_id": user_id})

        return await self.get_image(image.id, user_id)

    async def update_image(
        self,
        image_id: int,
        user_id: int,
        data: ImageUpdate,
    ) -> ImageRead | None:
        """Update an image owned by the user.

        Only fields present in the request are applied. Title and category
        can be changed but not cleared; an explicit null for them is ignored.

        Returns:
            Updated image, or None if missing or not owned by the user.
        """
        image = await self.repository.get_owned(image_id, user_id)
        if image is None:
            return None

        update_data = data.model_dump(exclude_unset=True)
        for field in _REQUIRED_FIELDS:
            if field in update_data and update_data[field] is None:
                del update_data[field]

        if update_data:
            await self.repository.update(image, **update_data)

        return await self.get_image(image_id, user_id)

    async def delete_image(self, image_id: int, user_id: int) -> bool:
        """Delete an image owned by the user.

        Likes, saves and comments go with it.

        Returns:
            True if deleted, False if missing or not owned by the user.
        """
        image = await self.repository.get_owned(image_id, user_id)
        if image is None:
            return False

        await self.repository.delete(image)
        logger.info("Image deleted", extra={"image_id": image_id, "user_id": user_id})
        return True

    # ─────────────────────────────────────────────────────────────────────
    # Likes and saves
    # ─────────────────────────────────────────────────────────────────────

    async def like_image(self, image_id: int, user_id: int) -> bool:
        """Like an image. Liking twice is a no-op.

        Returns:
            False only if the image does not exist.
        """
        if not await self.repository.exists(image_id):
            return False

        if await self.like_repository.add(user_id, image_id):
            await self.repository.adjust_counter(image_id, "likes", 1)
        return True

    async def unlike_image(self, image_id: int, user_id: int) -> bool:
        """Remove a like.

        Returns:
            True if a like was removed, False if there was none.
        """
        if not await self.like_repository.remove(user_id, image_id):
            return False

        await self.repository.adjust_counter(image_id, "likes", -1)
        return True

    async def save_image(self, image_id: int, user_id: int, collection_id: int) -> bool:
        """Save an image into one of the user's collections.

        Saving an image the user already saved moves it to the new
        collection without touching the counter. When the saver owns the
        image it is also filed into the collection.

        Returns:
            False if the image does not exist or the collection is not the user's.
        """
        image = await self.repository.get_by_id(image_id)
        if image is None:
            return False

        collection = await self.collection_repository.get_owned(collection_id, user_id)
        if collection is None:
            return False

        if await self.save_repository.add(user_id, image_id, collection_id):
            await self.repository.adjust_counter(image_id, "saves", 1)
        else:
            await self.save_repository.move(user_id, image_id, collection_id)

        if image.user_id == user_id:
            await self.repository.set_collection(image_id, collection_id)
        return True

    async def unsave_image(self, image_id: int, user_id: int) -> bool:
        """Remove the user's save of an image.

        For the image's owner this also takes it out of the collection it
        was filed into.

        Returns:
            True if anything was removed.
        """
        image = await self.repository.get_by_id(image_id)
        if image is None:
            return False

        removed = await self.save_repository.remove(user_id, image_id)
        if removed:
            await self.repository.adjust_counter(image_id, "saves", -1)

        unfiled = False
        if image.user_id == user_id and image.collection_id is not None:
            await self.repository.set_collection(image_id, None)
            unfiled = True

        return removed or unfiled

    # ─────────────────────────────────────────────────────────────────────
    # Comments
    # ─────────────────────────────────────────────────────────────────────

    async def get_comments(self, image_id: int) -> list[CommentRead] | None:
        """Get an image's comments, newest first.

        Returns:
            The comments, or None if the image does not exist.
        """
        if not await self.repository.exists(image_id):
            return None

        comments = await self.comment_repository.list_for_image(image_id)
        return [CommentRead.model_validate(c) for c in comments]

    async def add_comment(
        self,
        image_id: int,
        user_id: int,
        content: str,
    ) -> CommentRead | None:
        """Post a comment.

        Returns:
            The new comment with its author, or None if the image does not exist.
        """
        if not await self.repository.exists(image_id):
            return None

        comment = await self.comment_repository.create(
            content=content,
            user_id=user_id,
            image_id=image_id,
        )

        thread = await self.comment_repository.list_for_image(image_id)
        for item in thread:
            if item.id == comment.id:
                return CommentRead.model_validate(item)
        return None

    async def delete_comment(self, image_id: int, comment_id: int, user_id: int) -> bool:
        """Delete a comment written by the user.

        Returns:
            True if deleted, False if missing, on another image, or not the user's.
        """
        comment = await self.comment_repository.get_for_image(comment_id, image_id)
        if comment is None or comment.user_id != user_id:
            return False

        await self.comment_repository.delete(comment)
        return True

    # ─────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────

    async def to_read(self, image: Image, viewer_id: int | None) -> ImageRead:
        """Convert an image to its read schema with the viewer's like/save flags.

        Args:
            image: Image model instance.
            viewer_id: Current user, or None for anonymous requests.

        Returns:
            ImageRead schema.
        """
        read = ImageRead.model_validate(image)
        if viewer_id is None:
            return read

        read.is_liked = await self.like_repository.exists_for(viewer_id, image.id)
        read.is_saved = await self.save_repository.exists_for(viewer_id, image.id) or (
            image.collection_id is not None and image.user_id == viewer_id
        )
        return read

    async def _page(
        self,
        images: list[Image],
        total: int,
        page: int,
        limit: int,
        viewer_id: int | None,
    ) -> PaginatedResponse[ImageRead]:
        items = [await self.to_read(image, viewer_id) for image in images]
        return PaginatedResponse.create(items=items, total=total, page=page, page_size=limit)
