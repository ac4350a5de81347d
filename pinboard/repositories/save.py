"""Save repository for database operations."""

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.models.save import Save
from pinboard.repositories.base import BaseRepository


class SaveRepository(BaseRepository[Save]):
    """Repository for user_saves rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Save, session)

    async def add(self, user_id: int, image_id: int, collection_id: int) -> bool:
        """Store a save unless the user already saved the image.

        Returns:
            True if a new save row was stored.
        """
        return await self.insert_ignore(
            ["user_id", "image_id"],
            user_id=user_id,
            image_id=image_id,
            collection_id=collection_id,
        )

    async def move(self, user_id: int, image_id: int, collection_id: int) -> None:
        """Point an existing save at another collection."""
        await self.session.execute(
            update(Save)
            .where(Save.user_id == user_id, Save.image_id == image_id)
            .values(collection_id=collection_id)
            .execution_options(synchronize_session=False)
        )

    async def remove(self, user_id: int, image_id: int) -> bool:
        """Delete a save.

        Returns:
            True if a save row was deleted.
        """
        result = await self.session.execute(
            delete(Save).where(Save.user_id == user_id, Save.image_id == image_id)
        )
        return result.rowcount > 0

    async def exists_for(self, user_id: int, image_id: int) -> bool:
        """Check whether the user has saved the image anywhere."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Save)
            .where(Save.user_id == user_id, Save.image_id == image_id)
        )
        return result.scalar_one() > 0

    async def image_ids_in_collection(self, collection_id: int) -> list[int]:
        """Ids of images saved into a collection (one per save row)."""
        result = await self.session.execute(
            select(Save.image_id).where(Save.collection_id == collection_id)
        )
        return list(result.scalars().all())

    async def delete_for_collection(self, collection_id: int) -> int:
        """Delete every save pointing at a collection.

        Returns:
            Number of deleted rows.
        """
        result = await self.session.execute(
            delete(Save).where(Save.collection_id == collection_id)
        )
        return result.rowcount
