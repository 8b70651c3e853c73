"""Content card schemas.

A content card is the normalized view of one upstream item (a GitHub
repository, a Notion page, a Craft document, or a hand-edited card). Cards
are built fresh for every listing and never stored as such.
"""

from typing import Annotated, Optional

from pydantic import ConfigDict, Field

from devportal.models.enums import ContentSource

from .common import BaseSchema, UrlStr

MAX_TAGS = 10
MAX_TAG_LENGTH = 50

Tag = Annotated[str, Field(max_length=MAX_TAG_LENGTH)]


class ContentCard(BaseSchema):
    """Normalized content item shown on the dashboard."""

    id: str = Field(..., min_length=1, description="Source-namespaced id, e.g. github-1")
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)
    source: ContentSource
    url: UrlStr
    tags: list[Tag] = Field(default_factory=list, max_length=MAX_TAGS)
    last_updated: Optional[str] = None
    featured: bool = False


class CreateContentCard(BaseSchema):
    """Card payload without an id (create/update from the card editor)."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)
    source: ContentSource
    url: UrlStr
    tags: list[Tag] = Field(default_factory=list, max_length=MAX_TAGS)
    last_updated: Optional[str] = None
    featured: bool = False


class ContentCardFilter(BaseSchema):
    """Filter options for card listings. Search text is used verbatim."""

    model_config = ConfigDict(str_strip_whitespace=False)

    source: Optional[ContentSource] = None
    tags: Optional[list[str]] = None
    search_query: Optional[str] = None
    featured: Optional[bool] = None


class SourceStatus(BaseSchema):
    """Outcome of querying one upstream source during aggregation."""

    source: ContentSource
    success: bool
    count: int = 0
    error: Optional[str] = None


class AggregatedContentResponse(BaseSchema):
    """Filtered dashboard listing split into the featured and regular tiers."""

    featured: list[ContentCard]
    regular: list[ContentCard]
    total: int
    sources: list[SourceStatus] = Field(default_factory=list)


class AggregateContentRequest(BaseSchema):
    """Body of an aggregation request that also carries locally edited cards."""

    model_config = ConfigDict(str_strip_whitespace=False)

    search_query: str = ""
    filters: list[str] = Field(default_factory=list)
    github_username: Optional[str] = None
    card_filter: Optional[ContentCardFilter] = None
    local_items: list[ContentCard] = Field(default_factory=list)
