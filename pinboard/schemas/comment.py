"""Comment schemas."""

from datetime import datetime

from pydantic import Field

from pinboard.schemas.base import BaseSchema
from pinboard.schemas.user import UserPublic


class CommentCreate(BaseSchema):
    """Schema for posting a comment."""

    content: str = Field(..., min_length=1, max_length=1000)


class CommentRead(BaseSchema):
    """Comment with its author."""

    id: int
    content: str
    user_id: int
    image_id: int
    created_at: datetime
    user: UserPublic | None = None
