"""SQLAlchemy models package."""

from pinboard.models.base import Base
from pinboard.models.collection import Collection
from pinboard.models.comment import Comment
from pinboard.models.image import Category, Image
from pinboard.models.like import Like
from pinboard.models.save import Save
from pinboard.models.user import User

__all__ = [
    "Base",
    "Category",
    "Collection",
    "Comment",
    "Image",
    "Like",
    "Save",
    "User",
]
