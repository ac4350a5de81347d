"""User repository for database operations."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.models.collection import Collection
from pinboard.models.image import Image
from pinboard.models.user import User
from pinboard.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entity operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository.

        Args:
            session: Async database session.
        """
        super().__init__(User, session)

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email address.

        Args:
            email: User's email address (case-insensitive).

        Returns:
            User if found, None otherwise.
        """
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        """Get a user by exact username."""
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def email_or_username_exists(self, email: str, username: str) -> bool:
        """Check whether either identifier is already registered.

        Args:
            email: Email address to check (case-insensitive).
            username: Username to check.

        Returns:
            True if a user holds the email or the username.
        """
        result = await self.session.execute(
            select(func.count())
            .select_from(User)
            .where(or_(func.lower(User.email) == email.lower(), User.username == username))
        )
        return result.scalar_one() > 0

    async def create_user(
        self,
        username: str,
        email: str,
        hashed_password: str,
    ) -> User:
        """Create a new user.

        Args:
            username: Public handle.
            email: User's email address.
            hashed_password: Pre-hashed password (Argon2).

        Returns:
            Created user entity.
        """
        return await self.create(
            username=username,
            email=email.lower(),  # Normalize email to lowercase
            hashed_password=hashed_password,
        )

    async def get_stats(self, user_id: int) -> dict[str, int]:
        """Get user statistics (image and collection counts).

        Args:
            user_id: User's id.

        Returns:
            Dictionary with counts.
        """
        image_count = await self.session.execute(
            select(func.count()).select_from(Image).where(Image.user_id == user_id)
        )
        collection_count = await self.session.execute(
            select(func.count()).select_from(Collection).where(Collection.user_id == user_id)
        )

        return {
            "image_count": image_count.scalar_one(),
            "collection_count": collection_count.scalar_one(),
        }
