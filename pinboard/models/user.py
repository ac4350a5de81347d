"""User model for authentication and ownership."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pinboard.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and resource ownership.

    Attributes:
        id: Unique identifier.
        username: Unique public handle.
        email: Unique email address, stored lowercase.
        hashed_password: Argon2 hashed password.
        profile_image: Optional avatar URL.
        bio: Optional free-text bio.
    """

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        String(320),  # Max email length per RFC 5321
        unique=True,
        index=True,
        nullable=False,
    )

    hashed_password: Mapped[str] = mapped_column(
        String(128),  # Argon2 hash length
        nullable=False,
    )

    profile_image: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
    )

    bio: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<User {self.username}>"
