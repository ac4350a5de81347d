"""Collection repository for database operations."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.models.collection import Collection
from pinboard.repositories.base import BaseRepository


class CollectionRepository(BaseRepository[Collection]):
    """Repository for Collection entity operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize collection repository.

        Args:
            session: Async database session.
        """
        super().__init__(Collection, session)

    async def get_owned(self, collection_id: int, user_id: int) -> Collection | None:
        """Get a collection only if the given user owns it.

        Args:
            collection_id: The collection's id.
            user_id: The expected owner's id.

        Returns:
            The collection if found and owned by user, None otherwise.
        """
        result = await self.session.execute(
            select(Collection)
            .where(Collection.id == collection_id, Collection.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_collections(
        self,
        *,
        offset: int = 0,
        limit: int = 20,
        user_id: int | None = None,
    ) -> list[Collection]:
        """Get collections, newest first.

        Args:
            offset: Number of records to skip.
            limit: Maximum number of records to return.
            user_id: Only collections owned by this user.

        Returns:
            List of collections.
        """
        query = select(Collection)
        if user_id is not None:
            query = query.where(Collection.user_id == user_id)
        query = query.order_by(Collection.created_at.desc(), Collection.id.desc())
        query = query.offset(offset).limit(limit).execution_options(populate_existing=True)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_by_user(self, user_id: int) -> list[Collection]:
        """Get every collection of a user, newest first."""
        result = await self.session.execute(
            select(Collection)
            .where(Collection.user_id == user_id)
            .order_by(Collection.created_at.desc(), Collection.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def count_collections(self, *, user_id: int | None = None) -> int:
        """Count collections, optionally for one user."""
        query = select(func.count()).select_from(Collection)
        if user_id is not None:
            query = query.where(Collection.user_id == user_id)
        result = await self.session.execute(query)
        return result.scalar_one()
