"""Agent store schemas."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from devportal.models.enums import AgentLanguage, AgentTrack, ProficiencyLevel

from .common import BaseSchema, UrlStr


class AgentTool(BaseSchema):
    name: str = Field(..., min_length=1)
    description: str = ""


class AgentCreate(BaseSchema):
    """Payload for publishing an agent to the store."""

    name: str = Field(..., min_length=1, max_length=255)
    version: str = Field(default="1.0.0", max_length=50)
    description: Optional[str] = None
    language: AgentLanguage = AgentLanguage.TS
    tools: list[AgentTool] = Field(default_factory=list)
    endpoint: str = Field(..., min_length=1, max_length=255)
    dependencies: list[str] = Field(default_factory=list)
    auto_load: bool = False
    author: Optional[str] = None
    author_url: Optional[UrlStr] = None
    repository_url: Optional[UrlStr] = None
    documentation_url: Optional[UrlStr] = None
    tags: list[str] = Field(default_factory=list)
    is_public: bool = True
    rating: int = Field(default=0, ge=0, le=5)


class AgentUpdate(BaseSchema):
    """Partial update; only provided fields are written."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    version: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None
    language: Optional[AgentLanguage] = None
    tools: Optional[list[AgentTool]] = None
    endpoint: Optional[str] = Field(None, min_length=1, max_length=255)
    dependencies: Optional[list[str]] = None
    auto_load: Optional[bool] = None
    author: Optional[str] = None
    author_url: Optional[UrlStr] = None
    repository_url: Optional[UrlStr] = None
    documentation_url: Optional[UrlStr] = None
    tags: Optional[list[str]] = None
    is_public: Optional[bool] = None
    rating: Optional[int] = Field(None, ge=0, le=5)


class AgentListQuery(BaseSchema):
    """Listing filters; every provided filter must match."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    search: Optional[str] = Field(None, max_length=255)
    language: Optional[AgentLanguage] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class AgentResponse(BaseSchema):
    id: int
    name: str
    version: str
    description: Optional[str] = None
    language: AgentLanguage
    tools: list[dict[str, Any]] = Field(default_factory=list)
    endpoint: str
    dependencies: list[str] = Field(default_factory=list)
    auto_load: bool
    author: Optional[str] = None
    author_url: Optional[str] = None
    repository_url: Optional[str] = None
    documentation_url: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    is_public: bool
    download_count: int
    rating: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AgentListResponse(BaseSchema):
    agents: list[AgentResponse]
    total: int


# =============================================================================
# Profiles and skills
# =============================================================================

class SkillParameter(BaseSchema):
    name: str = Field(..., min_length=1)
    type: str
    description: Optional[str] = None
    required: bool = False


class AgentSkillCreate(BaseSchema):
    skill_id: str = Field(..., min_length=1)
    skill_name: str = Field(..., min_length=1)
    skill_description: Optional[str] = None
    category: Optional[str] = None
    parameters: list[SkillParameter] = Field(default_factory=list)
    proficiency_level: ProficiencyLevel = ProficiencyLevel.INTERMEDIATE


class AgentSkillResponse(AgentSkillCreate):
    id: int


class AgentProfileCreate(BaseSchema):
    agent_profile: str = Field(..., min_length=1, max_length=255)
    agent_id: str = Field(..., min_length=1, max_length=255)
    track: AgentTrack
    description: Optional[str] = None
    emoji: Optional[str] = Field(None, max_length=10)
    skills: list[AgentSkillCreate] = Field(..., min_length=1)


class AgentProfileResponse(BaseSchema):
    id: int
    agent_profile: str
    agent_id: str
    track: AgentTrack
    description: Optional[str] = None
    emoji: Optional[str] = None
    skills: list[AgentSkillResponse] = Field(default_factory=list)


class AgentSkillFilter(BaseSchema):
    """Filters for profile listings."""

    track: Optional[AgentTrack] = None
    search_query: Optional[str] = None
    skill_name: Optional[str] = None
    category: Optional[str] = None
