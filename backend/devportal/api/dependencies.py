"""FastAPI providers for source adapters and session-bound services.

Source adapters are process-wide singletons (each owns one aiohttp
session); ``close_sources`` releases them at shutdown. Services are built
per request around the request's database session.
"""

import logging
from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devportal.auth.dependencies import OptionalUser
from devportal.config import settings
from devportal.database import get_db
from devportal.services import (
    AgentCatalog,
    ApiKeyService,
    ContentAggregator,
    FavoritesStore,
    PreferencesService,
)
from devportal.sources import CraftSource, GitHubSource, NotionSource, SourceConfig

logger = logging.getLogger(__name__)


def _source_config(base_url: str) -> SourceConfig:
    return SourceConfig(
        base_url=base_url,
        timeout_seconds=settings.http_timeout_seconds,
        user_agent=settings.http_user_agent,
    )


@lru_cache()
def get_github_source() -> GitHubSource:
    return GitHubSource(_source_config(settings.github_api_base), default_token=settings.github_token)


@lru_cache()
def get_notion_source() -> NotionSource:
    return NotionSource(
        _source_config(settings.notion_api_base),
        token=settings.notion_token,
        database_id=settings.notion_database_id,
        notion_version=settings.notion_version,
    )


@lru_cache()
def get_craft_source() -> CraftSource:
    return CraftSource(_source_config(settings.craft_api_base))


def get_aggregator(
    github: Annotated[GitHubSource, Depends(get_github_source)],
    notion: Annotated[NotionSource, Depends(get_notion_source)],
    craft: Annotated[CraftSource, Depends(get_craft_source)],
) -> ContentAggregator:
    return ContentAggregator(github, notion, craft)


async def close_sources() -> None:
    """Close the HTTP sessions of every adapter created so far."""
    for getter in (get_github_source, get_notion_source, get_craft_source):
        if getter.cache_info().currsize:
            await getter().close()
    logger.info("Source sessions closed")


def get_favorites_store(db: Annotated[AsyncSession, Depends(get_db)]) -> FavoritesStore:
    return FavoritesStore(db)


def get_agent_catalog(db: Annotated[AsyncSession, Depends(get_db)]) -> AgentCatalog:
    return AgentCatalog(db)


def get_preferences_service(db: Annotated[AsyncSession, Depends(get_db)]) -> PreferencesService:
    return PreferencesService(db)


def get_api_key_service(db: Annotated[AsyncSession, Depends(get_db)]) -> ApiKeyService:
    return ApiKeyService(db)


async def get_github_token(
    user: OptionalUser,
    api_keys: Annotated[ApiKeyService, Depends(get_api_key_service)],
    token: Optional[str] = None,
) -> Optional[str]:
    """Token for GitHub calls: the explicit one, else the caller's stored key.

    ``None`` lets the adapter fall back to the server-wide token.
    """
    if token:
        return token
    if user is not None:
        return await api_keys.resolve_secret(user.id, "github")
    return None


GitHubDep = Annotated[GitHubSource, Depends(get_github_source)]
NotionDep = Annotated[NotionSource, Depends(get_notion_source)]
CraftDep = Annotated[CraftSource, Depends(get_craft_source)]
AggregatorDep = Annotated[ContentAggregator, Depends(get_aggregator)]
FavoritesDep = Annotated[FavoritesStore, Depends(get_favorites_store)]
CatalogDep = Annotated[AgentCatalog, Depends(get_agent_catalog)]
PreferencesDep = Annotated[PreferencesService, Depends(get_preferences_service)]
ApiKeysDep = Annotated[ApiKeyService, Depends(get_api_key_service)]
GitHubTokenDep = Annotated[Optional[str], Depends(get_github_token)]
