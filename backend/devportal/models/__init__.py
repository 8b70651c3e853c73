"""SQLAlchemy models for the DevPortal content portal.

Models:
    - User: Dashboard users with authentication
    - UserPreferences: User personalization settings (one per user)
    - UserFavorite: Per-user favorite content items
    - ApiKey: Encrypted third-party API keys
    - Agent: Agent store catalog entries
    - AgentProfile / AgentSkill: Agent personas and their skills

Usage:
    from devportal.models import User, UserFavorite, Agent
    from devportal.models import ContentSource, FavoriteContentType, UserRole
"""

# Base and utilities
from .base import Base, JSONType, TimestampMixin, metadata

# Enums
from .enums import (
    AgentLanguage,
    AgentTrack,
    ContentSource,
    FavoriteContentType,
    ProficiencyLevel,
    UserRole,
)

# Models
from .user import User, UserPreferences
from .favorite import UserFavorite
from .api_key import ApiKey
from .agent import Agent, AgentProfile, AgentSkill

__all__ = [
    # Base
    "Base",
    "JSONType",
    "TimestampMixin",
    "metadata",
    # Enums
    "AgentLanguage",
    "AgentTrack",
    "ContentSource",
    "FavoriteContentType",
    "ProficiencyLevel",
    "UserRole",
    # Models
    "User",
    "UserPreferences",
    "UserFavorite",
    "ApiKey",
    "Agent",
    "AgentProfile",
    "AgentSkill",
]
