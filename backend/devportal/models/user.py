"""User models for authentication and preferences."""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, JSONType, TimestampMixin
from .enums import UserRole

if TYPE_CHECKING:
    from .api_key import ApiKey
    from .favorite import UserFavorite


class User(Base, TimestampMixin):
    """Dashboard users with authentication credentials and roles.

    Users sign in either with an external identity (``open_id``) or with
    email and password. Passwords are stored as bcrypt hashes.

    Attributes:
        id: Primary key identifier.
        open_id: External identity returned by the OAuth provider (unique).
        email: User email address (unique, used for password login).
        password_hash: Bcrypt hashed password (absent for OAuth-only users).
        name: User's display name.
        login_method: How the user last authenticated.
        role: Permission level (user, admin).
        is_active: Whether the user account is active.
        last_signed_in: Timestamp of last successful login.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    open_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        unique=True,
        nullable=True,
        doc="External identity from the OAuth callback"
    )
    email: Mapped[str] = mapped_column(
        String(320),
        unique=True,
        nullable=False,
        doc="User email address (used for login)"
    )
    password_hash: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="Bcrypt hashed password"
    )
    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="User's display name"
    )
    login_method: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
        doc="Authentication method used for the last sign in"
    )
    role: Mapped[UserRole] = mapped_column(
        nullable=False,
        default=UserRole.USER,
        doc="User permission level (user, admin)"
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        doc="Whether the user account is active"
    )
    last_signed_in: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="Timestamp of last successful login"
    )

    # Relationships
    preferences: Mapped[Optional["UserPreferences"]] = relationship(
        "UserPreferences",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    favorites: Mapped[list["UserFavorite"]] = relationship(
        "UserFavorite",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    api_keys: Mapped[list["ApiKey"]] = relationship(
        "ApiKey",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_users_role", "role"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role={self.role.value})>"

class UserPreferences(Base, TimestampMixin):
    """User-specific dashboard settings.

    Stores the settings document as JSON (theme, language, notification
    switches, layout, enabled sources, saved card order). Missing keys are
    filled from defaults when read.

    Attributes:
        id: Primary key identifier.
        user_id: Foreign key to user (unique - one preferences row per user).
        preferences: JSON object with all preference settings.
    """

    __tablename__ = "user_preferences"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        doc="Reference to the user"
    )
    preferences: Mapped[dict[str, Any]] = mapped_column(
        JSONType,
        nullable=False,
        default=dict,
        doc="JSON object containing theme, notifications, layout, card order, etc."
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="preferences"
    )

    def __repr__(self) -> str:
        return f"<UserPreferences(id={self.id}, user_id={self.user_id})>"
