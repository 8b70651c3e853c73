"""Favorite request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from devportal.models.enums import FavoriteContentType

from .common import BaseSchema, UrlStr


class CreateUserFavorite(BaseSchema):
    """Payload for adding (or toggling) a favorite."""

    content_id: str = Field(..., min_length=1, max_length=255)
    content_type: FavoriteContentType
    content_title: str
    content_url: UrlStr
    content_description: Optional[str] = None
    content_image: Optional[UrlStr] = None
    tags: Optional[list[str]] = None


class DeleteUserFavorite(BaseSchema):
    content_id: str = Field(..., min_length=1)


class GetUserFavorites(BaseSchema):
    """Listing options; the owner always comes from the session."""

    content_type: Optional[FavoriteContentType] = None
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class UserFavoriteResponse(BaseSchema):
    id: int
    user_id: int
    content_id: str
    content_type: FavoriteContentType
    content_title: str
    content_url: str
    content_description: Optional[str] = None
    content_image: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v):
        return v or []


class FavoriteListResponse(BaseSchema):
    success: bool
    data: list[UserFavoriteResponse] = Field(default_factory=list)
    count: int = 0
    error: Optional[str] = None


class FavoriteStatusResponse(BaseSchema):
    success: bool
    is_favorited: bool


class FavoriteCountResponse(BaseSchema):
    success: bool
    count: int


class ToggleFavoriteResponse(BaseSchema):
    success: bool
    is_favorited: bool
    message: Optional[str] = None
    error: Optional[str] = None
