"""Pydantic Schemas for DevPortal.

This module contains all Pydantic models used for request/response
validation and serialization.
"""

from devportal.schemas.agents import (
    AgentCreate,
    AgentListQuery,
    AgentListResponse,
    AgentProfileCreate,
    AgentProfileResponse,
    AgentResponse,
    AgentSkillCreate,
    AgentSkillFilter,
    AgentTool,
    AgentUpdate,
    SkillParameter,
)
from devportal.schemas.api_keys import ApiKeyCreate, ApiKeyResponse
from devportal.schemas.auth import (
    RefreshTokenRequest,
    TokenPayload,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from devportal.schemas.common import BaseSchema, SuccessResponse, UrlStr
from devportal.schemas.content import (
    AggregateContentRequest,
    AggregatedContentResponse,
    ContentCard,
    ContentCardFilter,
    CreateContentCard,
    SourceStatus,
)
from devportal.schemas.favorites import (
    CreateUserFavorite,
    DeleteUserFavorite,
    FavoriteCountResponse,
    FavoriteListResponse,
    FavoriteStatusResponse,
    GetUserFavorites,
    ToggleFavoriteResponse,
    UserFavoriteResponse,
)
from devportal.schemas.preferences import UserPreferenceSettings, UserPreferenceUpdate
from devportal.schemas.sources import (
    CraftBlock,
    CraftCollection,
    CraftCollectionItem,
    CraftDocument,
    CraftSearchResult,
    GitHubRepo,
    GitHubRepoListResponse,
    GitHubUser,
    GitHubUserResponse,
    NotionBlock,
    NotionDatabaseInfo,
    NotionPage,
)

__all__ = [
    # Common
    "BaseSchema",
    "SuccessResponse",
    "UrlStr",
    # Auth
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "TokenResponse",
    "TokenPayload",
    "RefreshTokenRequest",
    # Content
    "ContentCard",
    "CreateContentCard",
    "ContentCardFilter",
    "SourceStatus",
    "AggregatedContentResponse",
    "AggregateContentRequest",
    # Favorites
    "CreateUserFavorite",
    "DeleteUserFavorite",
    "GetUserFavorites",
    "UserFavoriteResponse",
    "FavoriteListResponse",
    "FavoriteStatusResponse",
    "FavoriteCountResponse",
    "ToggleFavoriteResponse",
    # Sources
    "GitHubRepo",
    "GitHubUser",
    "GitHubRepoListResponse",
    "GitHubUserResponse",
    "NotionPage",
    "NotionBlock",
    "NotionDatabaseInfo",
    "CraftDocument",
    "CraftBlock",
    "CraftSearchResult",
    "CraftCollection",
    "CraftCollectionItem",
    # Agents
    "AgentTool",
    "AgentCreate",
    "AgentUpdate",
    "AgentListQuery",
    "AgentResponse",
    "AgentListResponse",
    "SkillParameter",
    "AgentSkillCreate",
    "AgentProfileCreate",
    "AgentProfileResponse",
    "AgentSkillFilter",
    # Preferences
    "UserPreferenceSettings",
    "UserPreferenceUpdate",
    # API keys
    "ApiKeyCreate",
    "ApiKeyResponse",
]
