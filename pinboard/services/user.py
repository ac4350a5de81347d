"""User service for user profile management."""

from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.core.exceptions import ConflictError
from pinboard.models.user import User
from pinboard.repositories.user import UserRepository
from pinboard.schemas.user import UserProfile, UserUpdate


class UserService:
    """Service for user profile operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user service.

        Args:
            session: Async database session.
        """
        self.session = session
        self.repository = UserRepository(session)

    async def get_profile(self, user_id: int) -> UserProfile | None:
        """Get a user's profile with upload and collection counts.

        Args:
            user_id: User's id.

        Returns:
            User profile, or None if the user does not exist.
        """
        user = await self.repository.get_by_id(user_id)
        if user is None:
            return None
        return await self._to_profile(user)

    async def update_profile(self, user_id: int, data: UserUpdate) -> UserProfile | None:
        """Update a user's profile.

        Args:
            user_id: User's id.
            data: Fields to change; only those present are applied.

        Returns:
            Updated profile, or None if the user does not exist.

        Raises:
            ConflictError: If the new username belongs to another user.
        """
        user = await self.repository.get_by_id(user_id)
        if user is None:
            return None

        update_data = data.model_dump(exclude_unset=True)
        new_username = update_data.get("username")
        if new_username is None:
            update_data.pop("username", None)
        elif new_username != user.username:
            existing = await self.repository.get_by_username(new_username)
            if existing is not None:
                raise ConflictError(message="Username already taken")

        if update_data:
            user = await self.repository.update(user, **update_data)

        return await self._to_profile(user)

    async def _to_profile(self, user: User) -> UserProfile:
        stats = await self.repository.get_stats(user.id)
        return UserProfile(
            id=user.id,
            username=user.username,
            email=user.email,
            profile_image=user.profile_image,
            bio=user.bio,
            created_at=user.created_at,
            image_count=stats["image_count"],
            collection_count=stats["collection_count"],
        )
