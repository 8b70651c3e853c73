"""Encrypted third-party API keys owned by users."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class ApiKey(Base, TimestampMixin):
    """A secret for an outside provider (GitHub, Bedrock, Vercel, ...).

    Only the Fernet token of the secret is stored; see
    ``devportal.services.api_keys`` for encryption.
    """

    __tablename__ = "api_keys"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    provider: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        doc="Provider slug: github, bedrock, vercel, aws, ..."
    )
    key_name: Mapped[str] = mapped_column(String(255), nullable=False)
    encrypted_key: Mapped[str] = mapped_column(Text, nullable=False)
    last_four: Mapped[str] = mapped_column(
        String(4),
        nullable=False,
        default="",
        doc="Last characters of the secret, shown in masked listings"
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_used: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    user: Mapped["User"] = relationship("User", back_populates="api_keys")

    __table_args__ = (
        Index("idx_api_keys_user_provider", "user_id", "provider"),
    )

    def __repr__(self) -> str:
        return f"<ApiKey(id={self.id}, provider='{self.provider}', name='{self.key_name}')>"
