"""Save model: an image pinned into one of the saver's collections."""

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pinboard.models.base import Base, CreatedAtMixin


class Save(Base, CreatedAtMixin):
    """A user's save of an image into a collection.

    One row per (user, image); saving again moves the row to another
    collection.
    """

    __tablename__ = "user_saves"
    __table_args__ = (UniqueConstraint("user_id", "image_id", name="uq_save_user_image"),)

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

    collection_id: Mapped[int] = mapped_column(
        ForeignKey("collections.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
