"""Image (pin) model and the fixed category list."""

from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pinboard.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from pinboard.models.user import User


class Category(StrEnum):
    """Categories an image or collection can be filed under."""

    INTERIOR = "interior"
    FASHION = "fashion"
    RECIPES = "recipes"
    TRAVEL = "travel"
    ART = "art"
    NATURE = "nature"
    TECHNOLOGY = "technology"
    FITNESS = "fitness"
    DIY = "diy"
    PHOTOGRAPHY = "photography"


class Image(Base, TimestampMixin):
    """Uploaded image with its like and save counters.

    Attributes:
        id: Unique identifier.
        url: Public URL of the stored file.
        title: Short title.
        description: Optional description.
        link: Optional external link.
        category: One of Category.
        likes: Number of like rows for this image.
        saves: Number of save rows for this image.
        user_id: Uploader.
        collection_id: Uploader's own collection, if filed in one.
        user: Uploader, eagerly loaded.
    """

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    url: Mapped[str] = mapped_column(String(2048), nullable=False)

    title: Mapped[str] = mapped_column(String(100), nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    link: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    category: Mapped[str] = mapped_column(String(50), index=True, nullable=False)

    likes: Mapped[int] = mapped_column(default=0, server_default="0", nullable=False)

    saves: Mapped[int] = mapped_column(default=0, server_default="0", nullable=False)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    collection_id: Mapped[int | None] = mapped_column(
        ForeignKey("collections.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )

    user: Mapped["User"] = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Image {self.title[:30]}>"
