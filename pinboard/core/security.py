"""Security utilities for authentication.

This module provides:
- Password hashing using Argon2id
- JWT access token creation and verification

Tokens are stateless: there is no server-side session or revocation list,
a token stays valid until it expires.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError
from pydantic import BaseModel

from pinboard.config import settings

_password_hasher = PasswordHasher(
    time_cost=settings.password_hash_time_cost,
    memory_cost=65536,  # 64 MB
    parallelism=4,
    hash_len=32,
    salt_len=16,
)


class TokenPayload(BaseModel):
    """Decoded JWT token payload."""

    sub: str  # Subject (user id as string)
    exp: datetime  # Expiration time
    iat: datetime  # Issued at


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Args:
        password: Plain text password to hash.

    Returns:
        Argon2id hash string containing algorithm parameters and salt.
    """
    return _password_hasher.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        password: Plain text password to verify.
        hashed_password: Argon2id hash to verify against.

    Returns:
        True if password matches, False otherwise.
    """
    try:
        _password_hasher.verify(hashed_password, password)
        return True
    except (VerificationError, InvalidHash):
        return False


def token_lifetime() -> timedelta:
    """Default lifetime of an access token."""
    return timedelta(days=settings.jwt_expire_days)


def create_access_token(
    user_id: int,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token.

    Args:
        user_id: User id to encode in the token.
        expires_delta: Optional custom expiration time.
            Defaults to settings.jwt_expire_days.

    Returns:
        Encoded JWT access token string.
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta if expires_delta is not None else token_lifetime())

    payload: dict[str, Any] = {
        "sub": str(user_id),
        "exp": expire,
        "iat": now,
    }

    return jwt.encode(
        payload,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> TokenPayload | None:
    """Decode and validate a JWT token.

    Args:
        token: JWT token string to decode.

    Returns:
        TokenPayload if valid, None if invalid or expired.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
        return TokenPayload(
            sub=payload["sub"],
            exp=datetime.fromtimestamp(payload["exp"], tz=UTC),
            iat=datetime.fromtimestamp(payload["iat"], tz=UTC),
        )
    except jwt.InvalidTokenError:
        return None


def verify_access_token(token: str) -> int | None:
    """Verify an access token and extract the user ID.

    Args:
        token: JWT access token string.

    Returns:
        User id if token is valid, None otherwise.
    """
    payload = decode_token(token)
    if payload is None:
        return None
    try:
        return int(payload.sub)
    except ValueError:
        return None
