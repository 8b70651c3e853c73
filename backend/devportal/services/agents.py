"""Agent store catalog: listing, search, admin CRUD and download counts."""

import logging
from typing import Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from devportal.middleware.error_handler import ConflictException, NotFoundException
from devportal.models import Agent, AgentProfile, AgentSkill
from devportal.schemas.agents import (
    AgentCreate,
    AgentListQuery,
    AgentProfileCreate,
    AgentSkillFilter,
    AgentUpdate,
)

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 50


class AgentCatalog:
    """Catalog operations bound to one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_agents(self, query: AgentListQuery) -> tuple[list[Agent], int]:
        """Public agents matching every provided filter, most downloaded first.

        Returns:
            The requested page and the number of matching agents overall.
        """
        conditions = [Agent.is_public.is_(True)]
        if query.search:
            conditions.append(Agent.name.icontains(query.search, autoescape=True))
        if query.language is not None:
            conditions.append(Agent.language == query.language)

        total = await self.db.scalar(select(func.count(Agent.id)).where(*conditions))
        result = await self.db.execute(
            select(Agent)
            .where(*conditions)
            .order_by(Agent.download_count.desc(), Agent.id)
            .limit(query.limit)
            .offset(query.offset)
        )
        return list(result.scalars().all()), total or 0

    async def get_by_id(self, agent_id: int) -> Optional[Agent]:
        return await self.db.get(Agent, agent_id)

    async def _get_or_404(self, agent_id: int) -> Agent:
        agent = await self.get_by_id(agent_id)
        if agent is None:
            raise NotFoundException("Agent not found", resource_type="agent", resource_id=agent_id)
        return agent

    async def search(self, text: str) -> list[Agent]:
        """Agents whose name or description contains ``text``."""
        result = await self.db.execute(
            select(Agent)
            .where(
                or_(
                    Agent.name.icontains(text, autoescape=True),
                    Agent.description.icontains(text, autoescape=True),
                )
            )
            .order_by(Agent.download_count.desc(), Agent.id)
            .limit(SEARCH_LIMIT)
        )
        return list(result.scalars().all())

    async def create(self, payload: AgentCreate) -> Agent:
        agent = Agent(**payload.model_dump())
        self.db.add(agent)
        await self.db.commit()
        logger.info(f"Created agent {agent.id} ({agent.name})")
        return agent

    async def update(self, agent_id: int, payload: AgentUpdate) -> Agent:
        """Write only the fields present in ``payload``."""
        agent = await self._get_or_404(agent_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(agent, field, value)
        await self.db.commit()
        logger.info(f"Updated agent {agent_id}")
        return agent

    async def delete(self, agent_id: int) -> None:
        agent = await self._get_or_404(agent_id)
        await self.db.delete(agent)
        await self.db.commit()
        logger.info(f"Deleted agent {agent_id}")

    async def increment_downloads(self, agent_id: int) -> int:
        """Atomically add one download and return the new count."""
        result = await self.db.execute(
            update(Agent)
            .where(Agent.id == agent_id)
            .values(download_count=Agent.download_count + 1)
            .returning(Agent.download_count)
            .execution_options(synchronize_session=False)
        )
        count = result.scalar_one_or_none()
        if count is None:
            await self.db.rollback()
            raise NotFoundException("Agent not found", resource_type="agent", resource_id=agent_id)
        await self.db.commit()
        return count

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    async def list_profiles(self, filters: AgentSkillFilter) -> list[AgentProfile]:
        stmt = select(AgentProfile).options(selectinload(AgentProfile.skills))
        if filters.track is not None:
            stmt = stmt.where(AgentProfile.track == filters.track)
        if filters.search_query:
            stmt = stmt.where(
                or_(
                    AgentProfile.agent_profile.icontains(filters.search_query, autoescape=True),
                    AgentProfile.agent_id.icontains(filters.search_query, autoescape=True),
                    AgentProfile.description.icontains(filters.search_query, autoescape=True),
                    AgentProfile.skills.any(
                        AgentSkill.skill_name.icontains(filters.search_query, autoescape=True)
                    ),
                )
            )
        if filters.skill_name:
            stmt = stmt.where(
                AgentProfile.skills.any(
                    AgentSkill.skill_name.icontains(filters.skill_name, autoescape=True)
                )
            )
        if filters.category:
            stmt = stmt.where(AgentProfile.skills.any(AgentSkill.category == filters.category))
        result = await self.db.execute(stmt.order_by(AgentProfile.id))
        return list(result.scalars().all())

    async def create_profile(self, payload: AgentProfileCreate) -> AgentProfile:
        data = payload.model_dump(exclude={"skills"})
        profile = AgentProfile(
            **data,
            skills=[AgentSkill(**skill.model_dump()) for skill in payload.skills],
        )
        self.db.add(profile)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictException("Agent profile already exists", conflicting_field="agent_id")
        logger.info(f"Created agent profile {profile.agent_id} with {len(payload.skills)} skills")
        return profile
