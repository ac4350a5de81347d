"""Collection schemas for request/response validation."""

from datetime import datetime

from pydantic import Field, field_validator

from pinboard.models.image import Category
from pinboard.schemas.base import BaseSchema
from pinboard.schemas.user import UserPublic


class CollectionBase(BaseSchema):
    """Base schema for collection data."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Collection name",
        examples=["Kitchen ideas"],
    )
    description: str | None = Field(
        default=None,
        max_length=500,
        description="Collection description",
    )
    category: Category | None = Field(default=None, description="Collection category")

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v: object) -> object:
        """Categories are case-insensitive; blank means none."""
        if isinstance(v, str):
            return v.strip().lower() or None
        return v


class CollectionCreate(CollectionBase):
    """Schema for creating a new collection."""


class CollectionUpdate(BaseSchema):
    """Schema for updating an existing collection.

    All fields are optional - only provided fields will be updated.
    """

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    category: Category | None = None

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v: object) -> object:
        """Categories are case-insensitive; blank means none."""
        if isinstance(v, str):
            return v.strip().lower() or None
        return v


class CollectionRead(BaseSchema):
    """Schema for reading collection data."""

    id: int
    name: str
    description: str | None = None
    category: str | None = None
    user_id: int
    created_at: datetime
    updated_at: datetime
    user: UserPublic | None = None
    images_count: int = Field(default=0, description="Number of images in collection")
    cover_image: str | None = Field(default=None, description="URL of the newest image")
