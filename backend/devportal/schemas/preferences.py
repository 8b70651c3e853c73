"""Dashboard preference schemas."""

from typing import Literal, Optional

from pydantic import ConfigDict, Field

from devportal.models.enums import ContentSource

from .common import BaseSchema


class UserPreferenceSettings(BaseSchema):
    """The full preferences document; missing keys take these defaults."""

    theme: Literal["dark", "light"] = "dark"
    language: str = "en"
    notifications_enabled: bool = True
    email_notifications: bool = False
    dashboard_layout: Literal["grid", "list", "kanban"] = "grid"
    items_per_page: int = Field(default=20, ge=1, le=100)
    enabled_sources: list[ContentSource] = Field(
        default_factory=lambda: [ContentSource.GITHUB, ContentSource.NOTION, ContentSource.CRAFT]
    )
    card_order: list[str] = Field(default_factory=list, description="Content ids in display order")
    auto_refresh: bool = False
    auto_refresh_interval: int = Field(default=300000, gt=0, description="Milliseconds")


class UserPreferenceUpdate(BaseSchema):
    """Partial update merged into the stored document."""

    model_config = ConfigDict(extra="forbid")

    theme: Optional[Literal["dark", "light"]] = None
    language: Optional[str] = None
    notifications_enabled: Optional[bool] = None
    email_notifications: Optional[bool] = None
    dashboard_layout: Optional[Literal["grid", "list", "kanban"]] = None
    items_per_page: Optional[int] = Field(None, ge=1, le=100)
    enabled_sources: Optional[list[ContentSource]] = None
    card_order: Optional[list[str]] = None
    auto_refresh: Optional[bool] = None
    auto_refresh_interval: Optional[int] = Field(None, gt=0)
