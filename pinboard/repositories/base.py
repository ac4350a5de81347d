"""Base repository with generic CRUD operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic repository providing common CRUD operations.

    This base class implements the repository pattern, abstracting
    database operations from business logic.

    Attributes:
        model: The SQLAlchemy model class this repository manages.
        session: The async database session.
    """

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        """Initialize repository with model and session.

        Args:
            model: SQLAlchemy model class.
            session: Async database session.
        """
        self.model = model
        self.session = session

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new entity.

        Args:
            **kwargs: Fields to set on the new entity.

        Returns:
            The created entity.
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Get an entity by its ID.

        Args:
            entity_id: The entity's id.

        Returns:
            The entity if found, None otherwise.
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == entity_id)  # type: ignore[attr-defined]
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def update(
        self,
        entity: ModelType,
        **kwargs: Any,
    ) -> ModelType:
        """Update an entity with given fields.

        Args:
            entity: The entity to update.
            **kwargs: Fields to update.

        Returns:
            The updated entity.
        """
        for key, value in kwargs.items():
            if hasattr(entity, key):
                setattr(entity, key, value)

        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelType) -> None:
        """Delete an entity.

        Args:
            entity: The entity to delete.
        """
        await self.session.delete(entity)
        await self.session.flush()

    async def exists(self, entity_id: int) -> bool:
        """Check if an entity exists.

        Args:
            entity_id: The entity's id.

        Returns:
            True if exists, False otherwise.
        """
        result = await self.session.execute(
            select(func.count())
            .select_from(self.model)
            .where(self.model.id == entity_id)  # type: ignore[attr-defined]
        )
        return result.scalar_one() > 0

    async def insert_ignore(self, conflict_columns: list[str], **values: Any) -> bool:
        """Insert a row unless it collides with a unique constraint.

        Args:
            conflict_columns: Columns of the unique constraint to check.
            **values: Column values for the new row.

        Returns:
            True if a row was inserted, False if it already existed.
        """
        table = self.model.__table__
        dialect = self.session.get_bind().dialect.name

        if dialect == "postgresql":
            stmt = (
                postgresql.insert(table)
                .values(**values)
                .on_conflict_do_nothing(index_elements=conflict_columns)
            )
        elif dialect == "sqlite":
            stmt = (
                sqlite.insert(table)
                .values(**values)
                .on_conflict_do_nothing(index_elements=conflict_columns)
            )
        else:
            # No native upsert: rely on the existence check inside the
            # request transaction.
            conditions = [table.c[name] == values[name] for name in conflict_columns]
            found = await self.session.execute(
                select(func.count()).select_from(table).where(*conditions)
            )
            if found.scalar_one() > 0:
                return False
            stmt = insert(table).values(**values)

        result = await self.session.execute(stmt)
        return result.rowcount == 1
