"""API dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pinboard.core.exceptions import AuthenticationError, ErrorCode
from pinboard.core.security import verify_access_token
from pinboard.database import get_db
from pinboard.schemas.base import PaginationParams
from pinboard.services.auth import AuthService
from pinboard.services.collection import CollectionService
from pinboard.services.image import ImageService
from pinboard.services.user import UserService

# Type alias for database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]

# auto_error=False so a missing token reaches our own error envelope
bearer_scheme = HTTPBearer(auto_error=False)


async def get_auth_service(
    session: DBSession,
) -> AsyncGenerator[AuthService, None]:
    """Get auth service instance.

    Args:
        session: Database session.

    Yields:
        AuthService instance.
    """
    yield AuthService(session)


async def get_image_service(
    session: DBSession,
) -> AsyncGenerator[ImageService, None]:
    """Get image service instance.

    Args:
        session: Database session.

    Yields:
        ImageService instance.
    """
    yield ImageService(session)


async def get_collection_service(
    session: DBSession,
) -> AsyncGenerator[CollectionService, None]:
    """Get collection service instance.

    Args:
        session: Database session.

    Yields:
        CollectionService instance.
    """
    yield CollectionService(session)


async def get_user_service(
    session: DBSession,
) -> AsyncGenerator[UserService, None]:
    """Get user service instance.

    Args:
        session: Database session.

    Yields:
        UserService instance.
    """
    yield UserService(session)


def get_pagination(
    page: int = Query(default=1, ge=1, description="Page number"),
    page_size: int | None = Query(
        default=None,
        alias="pageSize",
        ge=1,
        le=100,
        description="Items per page",
    ),
    limit: int | None = Query(
        default=None,
        ge=1,
        le=100,
        description="Items per page (older name for pageSize)",
    ),
) -> PaginationParams:
    """Get pagination parameters from query.

    ``pageSize`` wins when both it and ``limit`` are given.

    Args:
        page: Page number (1-indexed).
        page_size: Items per page.
        limit: Items per page, older parameter name.

    Returns:
        PaginationParams instance.
    """
    size = page_size if page_size is not None else limit
    if size is None:
        return PaginationParams(page=page)
    return PaginationParams(page=page, limit=size)


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> int:
    """Extract and verify user ID from JWT token.

    Args:
        credentials: HTTP Bearer credentials from Authorization header.

    Returns:
        User id from the verified token.

    Raises:
        AuthenticationError: If token is missing, invalid, or expired.
    """
    if credentials is None:
        raise AuthenticationError(
            message="No token provided",
            code=ErrorCode.UNAUTHORIZED,
        )

    user_id = verify_access_token(credentials.credentials)
    if user_id is None:
        raise AuthenticationError(
            message="Invalid token",
            code=ErrorCode.TOKEN_INVALID,
        )

    return user_id


async def get_optional_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> int | None:
    """Extract user ID from JWT token if present.

    Public endpoints use this to personalize responses; a missing or
    invalid token just means an anonymous viewer.

    Args:
        credentials: HTTP Bearer credentials from Authorization header.

    Returns:
        User id if token is valid, None otherwise.
    """
    if credentials is None:
        return None

    return verify_access_token(credentials.credentials)


# Type aliases for dependency injection
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ImageServiceDep = Annotated[ImageService, Depends(get_image_service)]
CollectionServiceDep = Annotated[CollectionService, Depends(get_collection_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
PaginationDep = Annotated[PaginationParams, Depends(get_pagination)]
CurrentUserID = Annotated[int, Depends(get_current_user_id)]
OptionalUserID = Annotated[int | None, Depends(get_optional_user_id)]
