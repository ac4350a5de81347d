"""Like model."""

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pinboard.models.base import Base, CreatedAtMixin


class Like(Base, CreatedAtMixin):
    """A user's like of an image, at most one per pair."""

    __table_args__ = (UniqueConstraint("user_id", "image_id", name="uq_like_user_image"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    image_id: Mapped[int] = mapped_column(
        ForeignKey("images.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
