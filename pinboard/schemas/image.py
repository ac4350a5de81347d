"""Image schemas for request/response validation."""

from datetime import datetime

from pydantic import Field, HttpUrl, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from pinboard.models.image import Category
from pinboard.schemas.base import BaseSchema
from pinboard.schemas.user import UserPublic


def _normalize_category(v: object) -> object:
    if isinstance(v, str):
        return v.strip().lower()
    return v


_url_adapter = TypeAdapter(HttpUrl)


def _validate_link(v: str | None) -> str | None:
    if not v:
        return None
    try:
        _url_adapter.validate_python(v)
    except PydanticValidationError:
        msg = "Invalid URL"
        raise ValueError(msg) from None
    return v


class ImageCreate(BaseSchema):
    """Form fields accompanying an uploaded image."""

    title: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    link: str | None = Field(default=None, max_length=2048)
    category: Category
    collection_id: int | None = Field(default=None, ge=1)

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v: object) -> object:
        """Categories are case-insensitive."""
        return _normalize_category(v)

    @field_validator("link")
    @classmethod
    def validate_link(cls, v: str | None) -> str | None:
        """Validate that the link is a URL."""
        return _validate_link(v)


class ImageUpdate(BaseSchema):
    """Schema for updating an image.

    Only provided fields are updated. Description and link can be
    cleared with an explicit null.
    """

    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    link: str | None = Field(default=None, max_length=2048)
    category: Category | None = None

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v: object) -> object:
        """Categories are case-insensitive."""
        return _normalize_category(v)

    @field_validator("link")
    @classmethod
    def validate_link(cls, v: str | None) -> str | None:
        """Validate that the link is a URL if provided."""
        return _validate_link(v)


class ImageRead(BaseSchema):
    """Image as seen by a particular viewer."""

    id: int
    url: str
    title: str
    description: str | None = None
    link: str | None = None
    category: str
    likes: int = 0
    saves: int = 0
    user_id: int
    collection_id: int | None = None
    created_at: datetime
    updated_at: datetime
    user: UserPublic | None = None
    is_liked: bool = False
    is_saved: bool = False


class SaveRequest(BaseSchema):
    """Body of a save request."""

    collection_id: int = Field(..., ge=1)


class LikeState(BaseSchema):
    """Like status returned by like/unlike."""

    liked: bool
    likes: int


class SaveState(BaseSchema):
    """Save status returned by save/unsave."""

    saved: bool
    saves: int
