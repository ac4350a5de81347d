"""Authentication schemas for request/response validation."""

from pydantic import EmailStr, Field

from pinboard.schemas.base import BaseSchema
from pinboard.schemas.user import USERNAME_PATTERN, UserRead


class RegisterRequest(BaseSchema):
    """Schema for user registration."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        pattern=USERNAME_PATTERN,
        description="Letters, digits and underscores only",
        examples=["jane_doe"],
    )
    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["user@example.com"],
    )
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="User's password (min 6 characters)",
        examples=["secret123"],
    )


class LoginRequest(BaseSchema):
    """Schema for login request."""

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["user@example.com"],
    )
    password: str = Field(
        ...,
        min_length=1,
        description="User's password",
    )


class AuthResponse(UserRead):
    """Authenticated user together with a bearer token."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type (always 'bearer')")
    expires_in: int | None = Field(
        default=None,
        description="Token lifetime in seconds",
        examples=[604800],
    )
