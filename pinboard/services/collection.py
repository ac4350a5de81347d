"""Collection service for business logic."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.models.collection import Collection
from pinboard.repositories.collection import CollectionRepository
from pinboard.repositories.image import ImageRepository
from pinboard.repositories.save import SaveRepository
from pinboard.schemas.base import PaginatedResponse
from pinboard.schemas.collection import CollectionCreate, CollectionRead, CollectionUpdate
from pinboard.schemas.image import ImageRead
from pinboard.services.image import ImageService
from pinboard.utils.pagination import offset

logger = logging.getLogger(__name__)


class CollectionService:
    """Service for collection business logic.

    A collection's images are those its owner filed into it plus those
    anyone saved into it; counts and covers are computed over both.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async database session.
        """
        self.session = session
        self.repository = CollectionRepository(session)
        self.image_repository = ImageRepository(session)
        self.save_repository = SaveRepository(session)

    async def list_collections(
        self,
        page: int,
        limit: int,
        user_id: int | None = None,
    ) -> PaginatedResponse[CollectionRead]:
        """List collections newest first.

        Args:
            page: Page number (1-indexed).
            limit: Items per page.
            user_id: Only this user's collections.

        Returns:
            Paginated list of collections.
        """
        collections = await self.repository.list_collections(
            offset=offset(page, limit),
            limit=limit,
            user_id=user_id,
        )
        total = await self.repository.count_collections(user_id=user_id)

        items = [await self._to_read_schema(c) for c in collections]
        return PaginatedResponse.create(items=items, total=total, page=page, page_size=limit)

    async def list_user_collections(self, user_id: int) -> list[CollectionRead]:
        """List every collection of a user, newest first."""
        collections = await self.repository.list_by_user(user_id)
        return [await self._to_read_schema(c) for c in collections]

    async def get_collection(self, collection_id: int) -> CollectionRead | None:
        """Get a collection by id."""
        collection = await self.repository.get_by_id(collection_id)
        if collection is None:
            return None
        return await self._to_read_schema(collection)

    async def get_collection_images(
        self,
        collection_id: int,
        current_user_id: int | None = None,
    ) -> list[ImageRead] | None:
        """Get the images in a collection, newest first.

        Returns:
            The images, or None if the collection does not exist.
        """
        if not await self.repository.exists(collection_id):
            return None

        images = await self.image_repository.list_collection_members(collection_id)
        image_service = ImageService(self.session)
        return [await image_service.to_read(image, current_user_id) for image in images]

    async def create_collection(
        self,
        user_id: int,
        data: CollectionCreate,
    ) -> CollectionRead:
        """Create a new collection. Names need not be unique.

        Args:
            user_id: Owner's id.
            data: Collection creation data.

        Returns:
            Created collection.
        """
        collection = await self.repository.create(
            user_id=user_id,
            name=data.name,
            description=data.description,
            category=data.category.value if data.category else None,
        )
        logger.info(
            "Collection created",
            extra={"collection_id": collection.id, "user_id": user_id},
        )

        created = await self.repository.get_by_id(collection.id)
        return await self._to_read_schema(created or collection)

    async def update_collection(
        self,
        collection_id: int,
        user_id: int,
        data: CollectionUpdate,
    ) -> CollectionRead | None:
        """Update a collection owned by the user.

        Only fields present in the request are applied; the name can be
        changed but not cleared.

        Returns:
            Updated collection, or None if missing or not owned by the user.
        """
        collection = await self.repository.get_owned(collection_id, user_id)
        if collection is None:
            return None

        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("name", "") is None:
            del update_data["name"]

        if update_data:
            collection = await self.repository.update(collection, **update_data)

        return await self.get_collection(collection.id)

    async def delete_collection(self, collection_id: int, user_id: int) -> bool:
        """Delete a collection owned by the user.

        Images are never deleted. Saves into the collection are removed
        and their images' save counters decremented; images filed into it
        are unfiled.

        Returns:
            True if deleted, False if missing or not owned by the user.
        """
        collection = await self.repository.get_owned(collection_id, user_id)
        if collection is None:
            return False

        saved_image_ids = await self.save_repository.image_ids_in_collection(collection_id)
        await self.image_repository.decrement_saves(saved_image_ids)
        await self.save_repository.delete_for_collection(collection_id)
        await self.image_repository.detach_collection(collection_id)
        await self.repository.delete(collection)

        logger.info(
            "Collection deleted",
            extra={
                "collection_id": collection_id,
                "user_id": user_id,
                "saves_removed": len(saved_image_ids),
            },
        )
        return True

    async def _to_read_schema(self, collection: Collection) -> CollectionRead:
        """Convert collection model to read schema.

        Args:
            collection: Collection model instance.

        Returns:
            CollectionRead schema with image count and cover.
        """
        read = CollectionRead.model_validate(collection)
        read.images_count = await self.image_repository.count_collection_members(collection.id)
        read.cover_image = await self.image_repository.collection_cover(collection.id)
        return read
