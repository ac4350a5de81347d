"""Collection model for grouping images."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pinboard.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from pinboard.models.user import User


class Collection(Base, TimestampMixin):
    """Named, user-owned board of images.

    Image count and cover are not stored; they are computed from the
    images filed into the collection and the saves pointing at it.
    """

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    category: Mapped[str | None] = mapped_column(String(50), nullable=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    user: Mapped["User"] = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Collection {self.name}>"
