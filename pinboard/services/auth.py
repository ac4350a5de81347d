"""Authentication service for registration, login and token checks."""

import logging
from functools import lru_cache

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.core.security import (
    create_access_token,
    hash_password,
    token_lifetime,
    verify_access_token,
    verify_password,
)
from pinboard.models.user import User
from pinboard.repositories.user import UserRepository
from pinboard.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from pinboard.schemas.user import UserRead

logger = logging.getLogger(__name__)


@lru_cache
def _dummy_hash() -> str:
    """Hash verified against when the email is unknown, so timing matches a wrong password."""
    return hash_password("unknown-user-placeholder")


class AuthService:
    """Service for authentication operations.

    Failures are reported as None; the API layer decides which HTTP
    error that becomes.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize auth service.

        Args:
            session: Async database session.
        """
        self.session = session
        self.user_repository = UserRepository(session)

    async def register(self, data: RegisterRequest) -> AuthResponse | None:
        """Register a new user and sign them in.

        Args:
            data: Registration data.

        Returns:
            The new user with a token, or None if the email or username
            is already taken.
        """
        if await self.user_repository.email_or_username_exists(data.email, data.username):
            return None

        try:
            user = await self.user_repository.create_user(
                username=data.username,
                email=data.email,
                hashed_password=hash_password(data.password),
            )
        except IntegrityError:
            # Lost a race against a concurrent registration
            await self.session.rollback()
            return None

        logger.info("User registered", extra={"user_id": user.id})
        return self._auth_response(user)

    async def login(self, data: LoginRequest) -> AuthResponse | None:
        """Authenticate by email and password.

        Args:
            data: Login credentials.

        Returns:
            The user with a fresh token, or None if the credentials are wrong.
        """
        user = await self.user_repository.get_by_email(data.email)
        if user is None:
            verify_password(data.password, _dummy_hash())
            return None

        if not verify_password(data.password, user.hashed_password):
            return None

        return self._auth_response(user)

    async def validate_token(self, token: str) -> UserRead | None:
        """Resolve a bearer token to the user it was issued for.

        Args:
            token: JWT access token.

        Returns:
            The user, or None if the token is invalid, expired, or the
            user no longer exists.
        """
        user_id = verify_access_token(token)
        if user_id is None:
            return None

        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            return None

        return UserRead.model_validate(user)

    def _auth_response(self, user: User) -> AuthResponse:
        return AuthResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            profile_image=user.profile_image,
            bio=user.bio,
            created_at=user.created_at,
            token=create_access_token(user.id),
            token_type="bearer",
            expires_in=int(token_lifetime().total_seconds()),
        )
