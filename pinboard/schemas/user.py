"""User schemas for request/response validation."""

from datetime import datetime

from pydantic import Field

from pinboard.schemas.base import BaseSchema

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


class UserPublic(BaseSchema):
    """Public view of a user, embedded in images and comments."""

    id: int
    username: str
    profile_image: str | None = None


class UserRead(UserPublic):
    """Full user record as returned to its owner. Never includes the password."""

    email: str
    bio: str | None = None
    created_at: datetime | None = None


class UserProfile(UserRead):
    """User profile with statistics."""

    image_count: int = Field(default=0, description="Number of uploaded images")
    collection_count: int = Field(default=0, description="Number of collections")


class UserUpdate(BaseSchema):
    """Schema for updating user profile.

    All fields are optional - only provided fields will be updated.
    """

    username: str | None = Field(
        default=None,
        min_length=3,
        max_length=50,
        pattern=USERNAME_PATTERN,
    )
    bio: str | None = Field(default=None, max_length=500)
    profile_image: str | None = Field(default=None, max_length=2048)
