"""Agent store routes. Catalog mutations require the admin role."""

from typing import Annotated, Optional

from fastapi import APIRouter, Query, status
from pydantic import BaseModel

from devportal.api.dependencies import CatalogDep
from devportal.auth import AdminUser
from devportal.middleware.error_handler import NotFoundException
from devportal.models.enums import AgentLanguage, AgentTrack
from devportal.schemas.agents import (
    AgentCreate,
    AgentListQuery,
    AgentListResponse,
    AgentProfileCreate,
    AgentProfileResponse,
    AgentResponse,
    AgentSkillFilter,
    AgentUpdate,
)
from devportal.schemas.common import SuccessResponse

router = APIRouter(prefix="/agents", tags=["agents"])


class DownloadResponse(BaseModel):
    success: bool
    download_count: int


@router.get("", response_model=AgentListResponse)
async def list_agents(
    catalog: CatalogDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    search: Annotated[Optional[str], Query(max_length=255)] = None,
    language: Optional[AgentLanguage] = None,
) -> AgentListResponse:
    """Public agents, most downloaded first; ``total`` counts every match."""
    query = AgentListQuery(page=page, limit=limit, search=search, language=language)
    agents, total = await catalog.list_agents(query)
    return AgentListResponse(
        agents=[AgentResponse.model_validate(agent) for agent in agents],
        total=total,
    )


@router.get("/search", response_model=list[AgentResponse])
async def search_agents(
    catalog: CatalogDep,
    query: Annotated[str, Query(min_length=1)],
) -> list[AgentResponse]:
    return [AgentResponse.model_validate(agent) for agent in await catalog.search(query)]


@router.get("/profiles", response_model=list[AgentProfileResponse])
async def list_profiles(
    catalog: CatalogDep,
    track: Optional[AgentTrack] = None,
    search: Optional[str] = None,
    skill_name: Optional[str] = None,
    category: Optional[str] = None,
) -> list[AgentProfileResponse]:
    filters = AgentSkillFilter(
        track=track,
        search_query=search,
        skill_name=skill_name,
        category=category,
    )
    profiles = await catalog.list_profiles(filters)
    return [AgentProfileResponse.model_validate(profile) for profile in profiles]


@router.post(
    "/profiles",
    response_model=AgentProfileResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_profile(
    payload: AgentProfileCreate,
    catalog: CatalogDep,
    _admin: AdminUser,
) -> AgentProfileResponse:
    profile = await catalog.create_profile(payload)
    return AgentProfileResponse.model_validate(profile)


@router.get("/{agent_id}", response_model=AgentResponse)
async def get_agent(agent_id: int, catalog: CatalogDep) -> AgentResponse:
    agent = await catalog.get_by_id(agent_id)
    if agent is None:
        raise NotFoundException("Agent not found", resource_type="agent", resource_id=agent_id)
    return AgentResponse.model_validate(agent)


@router.post("", response_model=AgentResponse, status_code=status.HTTP_201_CREATED)
async def create_agent(
    payload: AgentCreate,
    catalog: CatalogDep,
    _admin: AdminUser,
) -> AgentResponse:
    return AgentResponse.model_validate(await catalog.create(payload))


@router.patch("/{agent_id}", response_model=AgentResponse)
async def update_agent(
    agent_id: int,
    payload: AgentUpdate,
    catalog: CatalogDep,
    _admin: AdminUser,
) -> AgentResponse:
    return AgentResponse.model_validate(await catalog.update(agent_id, payload))


@router.delete("/{agent_id}", response_model=SuccessResponse)
async def delete_agent(
    agent_id: int,
    catalog: CatalogDep,
    _admin: AdminUser,
) -> SuccessResponse:
    await catalog.delete(agent_id)
    return SuccessResponse(success=True, message="Agent deleted")


@router.post("/{agent_id}/downloads", response_model=DownloadResponse)
async def increment_downloads(agent_id: int, catalog: CatalogDep) -> DownloadResponse:
    count = await catalog.increment_downloads(agent_id)
    return DownloadResponse(success=True, download_count=count)
