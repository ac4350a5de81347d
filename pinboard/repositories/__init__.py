"""Repository package for data access layer."""

from pinboard.repositories.base import BaseRepository
from pinboard.repositories.collection import CollectionRepository
from pinboard.repositories.comment import CommentRepository
from pinboard.repositories.image import ImageRepository, ImageSort
from pinboard.repositories.like import LikeRepository
from pinboard.repositories.save import SaveRepository
from pinboard.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "CollectionRepository",
    "CommentRepository",
    "ImageRepository",
    "ImageSort",
    "LikeRepository",
    "SaveRepository",
    "UserRepository",
]
