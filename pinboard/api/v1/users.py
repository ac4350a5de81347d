"""User profile endpoints."""

from fastapi import APIRouter

from pinboard.api.deps import CurrentUserID, UserServiceDep
from pinboard.core.exceptions import AuthorizationError, ErrorCode, NotFoundError
from pinboard.schemas.base import ApiResponse, ok
from pinboard.schemas.user import UserProfile, UserUpdate

router = APIRouter()


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserProfile],
    summary="Get profile",
    description="Get a user's profile with upload and collection counts.",
)
async def get_profile(
    user_id: int,
    service: UserServiceDep,
) -> ApiResponse[UserProfile]:
    """Get a user's profile."""
    profile = await service.get_profile(user_id)
    if profile is None:
        raise NotFoundError("User", user_id, code=ErrorCode.USER_NOT_FOUND)
    return ok(profile)


@router.put(
    "/{user_id}",
    response_model=ApiResponse[UserProfile],
    summary="Update profile",
    description="Update your own profile. Only provided fields are changed.",
)
async def update_profile(
    user_id: int,
    data: UserUpdate,
    current_user_id: CurrentUserID,
    service: UserServiceDep,
) -> ApiResponse[UserProfile]:
    """Update a profile.

    - **username**: New username (must be unique)
    - **bio**: Short bio
    - **profileImage**: Avatar URL
    """
    if user_id != current_user_id:
        raise AuthorizationError("You can only update your own profile")

    profile = await service.update_profile(user_id, data)
    if profile is None:
        raise NotFoundError("User", user_id, code=ErrorCode.USER_NOT_FOUND)
    return ok(profile, "Profile updated successfully")
