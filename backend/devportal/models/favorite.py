"""Per-user favorite records for normalized content items."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, JSONType, TimestampMixin
from .enums import FavoriteContentType

if TYPE_CHECKING:
    from .user import User


class UserFavorite(Base, TimestampMixin):
    """A content item a user has marked as favorite.

    The content itself lives upstream (GitHub, Notion, ...); this row keeps
    a snapshot of what the dashboard needs to render the card without
    refetching it. A user can favorite a given ``content_id`` only once.

    Attributes:
        id: Surrogate primary key.
        user_id: Owning user (cascade-deleted with the user).
        content_id: Normalized content id, e.g. ``github-1296269``.
        content_type: Source family of the content.
        content_title: Title at the time it was favorited.
        content_url: Absolute URL of the content.
        content_description: Optional description snapshot.
        content_image: Optional image URL.
        tags: Tag list snapshot.
    """

    __tablename__ = "user_favorites"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        doc="Reference to the owning user"
    )
    content_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Normalized id of the favorited content item"
    )
    content_type: Mapped[FavoriteContentType] = mapped_column(
        nullable=False,
        default=FavoriteContentType.OTHER,
        doc="Source family of the content"
    )
    content_title: Mapped[str] = mapped_column(Text, nullable=False)
    content_url: Mapped[str] = mapped_column(Text, nullable=False)
    content_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    content_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[Optional[list[str]]] = mapped_column(
        JSONType,
        nullable=True,
        doc="Tag list snapshot"
    )

    user: Mapped["User"] = relationship("User", back_populates="favorites")

    __table_args__ = (
        UniqueConstraint("user_id", "content_id", name="uq_user_favorites_user_content"),
        Index("idx_user_favorites_user_type", "user_id", "content_type"),
    )

    def __repr__(self) -> str:
        return f"<UserFavorite(id={self.id}, user_id={self.user_id}, content_id='{self.content_id}')>"
