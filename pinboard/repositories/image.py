"""Image repository for database operations."""

from enum import StrEnum
from typing import Any

from sqlalchemy import ColumnElement, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.models.image import Image
from pinboard.models.save import Save
from pinboard.repositories.base import BaseRepository


class ImageSort(StrEnum):
    """Available orderings for image feeds."""

    NEWEST = "newest"
    POPULAR = "popular"
    LIKES = "likes"
    SAVES = "saves"


# Every ordering ends with created_at, id so paging is deterministic.
_NEWEST = (Image.created_at.desc(), Image.id.desc())

_ORDERINGS: dict[ImageSort, tuple[Any, ...]] = {
    ImageSort.NEWEST: _NEWEST,
    ImageSort.POPULAR: ((Image.likes + Image.saves).desc(), *_NEWEST),
    ImageSort.LIKES: (Image.likes.desc(), *_NEWEST),
    ImageSort.SAVES: (Image.saves.desc(), *_NEWEST),
}


def collection_member_clause(collection_id: int) -> ColumnElement[bool]:
    """Match images filed into a collection by their owner or saved into it."""
    saved_ids = select(Save.image_id).where(Save.collection_id == collection_id)
    return or_(Image.collection_id == collection_id, Image.id.in_(saved_ids))


class ImageRepository(BaseRepository[Image]):
    """Repository for Image entity operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize image repository.

        Args:
            session: Async database session.
        """
        super().__init__(Image, session)

    @staticmethod
    def _filters(
        category: str | None = None,
        search: str | None = None,
        user_id: int | None = None,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if category:
            conditions.append(Image.category == category)
        if search:
            # % and _ in the search text match literally
            conditions.append(
                or_(
                    Image.title.contains(search, autoescape=True),
                    Image.description.contains(search, autoescape=True),
                )
            )
        if user_id is not None:
            conditions.append(Image.user_id == user_id)
        return conditions

    async def list_images(
        self,
        *,
        offset: int = 0,
        limit: int = 20,
        category: str | None = None,
        search: str | None = None,
        user_id: int | None = None,
        sort: ImageSort = ImageSort.NEWEST,
    ) -> list[Image]:
        """Get one page of images.

        Args:
            offset: Number of records to skip.
            limit: Maximum number of records to return.
            category: Exact category filter.
            search: Substring matched against title or description.
            user_id: Only images uploaded by this user.
            sort: Ordering to apply.

        Returns:
            List of images with their uploader loaded.
        """
        query = (
            select(Image)
            .where(*self._filters(category, search, user_id))
            .order_by(*_ORDERINGS[sort])
            .offset(offset)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_images(
        self,
        *,
        category: str | None = None,
        search: str | None = None,
        user_id: int | None = None,
    ) -> int:
        """Count images matching the same filters as list_images."""
        query = (
            select(func.count())
            .select_from(Image)
            .where(*self._filters(category, search, user_id))
        )
        result = await self.session.execute(query)
        return result.scalar_one()

    async def get_owned(self, image_id: int, user_id: int) -> Image | None:
        """Get an image only if the given user uploaded it.

        Args:
            image_id: The image's id.
            user_id: The expected owner's id.

        Returns:
            The image if found and owned by user, None otherwise.
        """
        result = await self.session.execute(
            select(Image)
            .where(Image.id == image_id, Image.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def adjust_counter(self, image_id: int, field: str, delta: int) -> None:
        """Atomically add delta to the likes or saves counter.

        Decrements never take a counter below zero.

        Args:
            image_id: The image's id.
            field: "likes" or "saves".
            delta: Amount to add (negative to decrement).
        """
        column = getattr(Image, field)
        stmt = update(Image).where(Image.id == image_id).values({field: column + delta})
        if delta < 0:
            stmt = stmt.where(column >= -delta)
        await self.session.execute(stmt.execution_options(synchronize_session=False))

    async def decrement_saves(self, image_ids: list[int]) -> None:
        """Decrement the saves counter of each image once."""
        if not image_ids:
            return
        await self.session.execute(
            update(Image)
            .where(Image.id.in_(image_ids), Image.saves > 0)
            .values(saves=Image.saves - 1)
            .execution_options(synchronize_session=False)
        )

    async def set_collection(self, image_id: int, collection_id: int | None) -> None:
        """File an image into one of its owner's collections, or unfile it."""
        await self.session.execute(
            update(Image)
            .where(Image.id == image_id)
            .values(collection_id=collection_id)
            .execution_options(synchronize_session=False)
        )

    async def detach_collection(self, collection_id: int) -> None:
        """Unfile every image filed into a collection."""
        await self.session.execute(
            update(Image)
            .where(Image.collection_id == collection_id)
            .values(collection_id=None)
            .execution_options(synchronize_session=False)
        )

    async def list_collection_members(self, collection_id: int) -> list[Image]:
        """Get all images in a collection, newest first."""
        result = await self.session.execute(
            select(Image)
            .where(collection_member_clause(collection_id))
            .order_by(*_NEWEST)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def count_collection_members(self, collection_id: int) -> int:
        """Count images in a collection."""
        result = await self.session.execute(
            select(func.count()).select_from(Image).where(collection_member_clause(collection_id))
        )
        return result.scalar_one()

    async def collection_cover(self, collection_id: int) -> str | None:
        """URL of the most recent image in a collection, if any."""
        result = await self.session.execute(
            select(Image.url)
            .where(collection_member_clause(collection_id))
            .order_by(*_NEWEST)
            .limit(1)
        )
        return result.scalar_one_or_none()
