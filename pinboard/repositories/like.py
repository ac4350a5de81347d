"""Like repository for database operations."""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.models.like import Like
from pinboard.repositories.base import BaseRepository


class LikeRepository(BaseRepository[Like]):
    """Repository for Like rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Like, session)

    async def add(self, user_id: int, image_id: int) -> bool:
        """Record a like.

        Returns:
            True if a new like was stored, False if it already existed.
        """
        return await self.insert_ignore(
            ["user_id", "image_id"],
            user_id=user_id,
            image_id=image_id,
        )

    async def remove(self, user_id: int, image_id: int) -> bool:
        """Delete a like.

        Returns:
            True if a like row was deleted.
        """
        result = await self.session.execute(
            delete(Like).where(Like.user_id == user_id, Like.image_id == image_id)
        )
        return result.rowcount > 0

    async def exists_for(self, user_id: int, image_id: int) -> bool:
        """Check whether the user has liked the image."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Like)
            .where(Like.user_id == user_id, Like.image_id == image_id)
        )
        return result.scalar_one() > 0
