"""Aggregated dashboard content."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from devportal.api.dependencies import AggregatorDep, GitHubTokenDep
from devportal.auth import CurrentUser, OptionalUser
from devportal.database import get_db
from devportal.models import User
from devportal.models.enums import ContentSource
from devportal.schemas.content import (
    AggregateContentRequest,
    AggregatedContentResponse,
    ContentCard,
    ContentCardFilter,
)
from devportal.services import (
    ContentAggregator,
    FavoritesStore,
    PreferencesService,
    apply_card_filter,
    apply_card_order,
    filter_content,
    partition_featured,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])


async def _build_listing(
    aggregator: ContentAggregator,
    db: AsyncSession,
    user: Optional[User],
    search: str,
    filters: list[str],
    github_username: Optional[str],
    github_token: Optional[str],
    sources: Optional[list[ContentSource]],
    local_items: list[ContentCard],
    card_filter: Optional[ContentCardFilter],
) -> AggregatedContentResponse:
    items, statuses = await aggregator.collect(
        github_username=github_username,
        github_token=github_token,
        include=sources,
        local_items=local_items,
    )

    favorited: set[str] = set()
    if user is not None:
        favorited = await FavoritesStore(db).favorited_ids(user.id)
        items = apply_card_order(items, await PreferencesService(db).card_order(user.id))

    visible = apply_card_filter(filter_content(items, search, filters, favorited), card_filter)
    featured, regular = partition_featured(visible)
    return AggregatedContentResponse(
        featured=featured,
        regular=regular,
        total=len(visible),
        sources=statuses,
    )


@router.get("", response_model=AggregatedContentResponse)
async def get_content(
    aggregator: AggregatorDep,
    user: OptionalUser,
    github_token: GitHubTokenDep,
    db: Annotated[AsyncSession, Depends(get_db)],
    search: str = "",
    filters: Annotated[list[str], Query()] = [],
    github_username: Optional[str] = None,
    sources: Annotated[Optional[list[ContentSource]], Query()] = None,
    tags: Annotated[Optional[list[str]], Query()] = None,
    featured: Optional[bool] = None,
) -> AggregatedContentResponse:
    """All sources, merged and filtered.

    ``filters`` takes source names and ``favorite``; favorite state and the
    saved card order only apply to signed-in callers. ``tags`` keeps cards
    carrying any of the given tags.
    """
    card_filter = ContentCardFilter(tags=tags, featured=featured)
    return await _build_listing(
        aggregator, db, user, search, filters, github_username, github_token, sources, [], card_filter
    )


@router.post("", response_model=AggregatedContentResponse)
async def aggregate_content(
    payload: AggregateContentRequest,
    aggregator: AggregatorDep,
    user: OptionalUser,
    github_token: GitHubTokenDep,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AggregatedContentResponse:
    """Same as ``GET /content`` but also merges cards supplied by the caller."""
    return await _build_listing(
        aggregator,
        db,
        user,
        payload.search_query,
        payload.filters,
        payload.github_username,
        github_token,
        None,
        payload.local_items,
        payload.card_filter,
    )


@router.get("/favorites", response_model=list[ContentCard])
async def get_favorite_content(
    aggregator: AggregatorDep,
    user: CurrentUser,
    github_token: GitHubTokenDep,
    db: Annotated[AsyncSession, Depends(get_db)],
    github_username: Optional[str] = None,
) -> list[ContentCard]:
    """Aggregated items the caller has favorited."""
    items, _ = await aggregator.collect(github_username=github_username, github_token=github_token)
    favorited = await FavoritesStore(db).favorited_ids(user.id)
    return [item for item in items if item.id in favorited]
