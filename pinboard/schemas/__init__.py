"""Pydantic schemas package."""

from pinboard.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from pinboard.schemas.base import ApiResponse, PaginatedResponse, PaginationParams, ok
from pinboard.schemas.collection import CollectionCreate, CollectionRead, CollectionUpdate
from pinboard.schemas.comment import CommentCreate, CommentRead
from pinboard.schemas.image import (
    ImageCreate,
    ImageRead,
    ImageUpdate,
    LikeState,
    SaveRequest,
    SaveState,
)
from pinboard.schemas.user import UserProfile, UserPublic, UserRead, UserUpdate

__all__ = [
    "ApiResponse",
    "AuthResponse",
    "CollectionCreate",
    "CollectionRead",
    "CollectionUpdate",
    "CommentCreate",
    "CommentRead",
    "ImageCreate",
    "ImageRead",
    "ImageUpdate",
    "LikeState",
    "LoginRequest",
    "PaginatedResponse",
    "PaginationParams",
    "RegisterRequest",
    "SaveRequest",
    "SaveState",
    "UserProfile",
    "UserPublic",
    "UserRead",
    "UserUpdate",
    "ok",
]
