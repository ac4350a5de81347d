"""Core module exports."""

from pinboard.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from pinboard.core.security import (
    TokenPayload,
    create_access_token,
    decode_token,
    hash_password,
    verify_access_token,
    verify_password,
)

__all__ = [
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "NotFoundError",
    "TokenPayload",
    "ValidationError",
    "create_access_token",
    "decode_token",
    "hash_password",
    "verify_access_token",
    "verify_password",
]
