"""Services package for business logic."""

from pinboard.services.auth import AuthService
from pinboard.services.collection import CollectionService
from pinboard.services.image import ImageService
from pinboard.services.user import UserService

__all__ = [
    "AuthService",
    "CollectionService",
    "ImageService",
    "UserService",
]
