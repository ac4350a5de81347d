"""Comment repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.models.comment import Comment
from pinboard.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment entity operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Comment, session)

    async def list_for_image(self, image_id: int) -> list[Comment]:
        """Get the comment thread of an image, newest first.

        Args:
            image_id: The image's id.

        Returns:
            Comments with their authors loaded.
        """
        result = await self.session.execute(
            select(Comment)
            .where(Comment.image_id == image_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_for_image(self, comment_id: int, image_id: int) -> Comment | None:
        """Get a comment only if it belongs to the given image."""
        result = await self.session.execute(
            select(Comment).where(Comment.id == comment_id, Comment.image_id == image_id)
        )
        return result.scalar_one_or_none()
