"""Agent catalog models: published agents, agent profiles and their skills."""

from typing import Any, Optional

from sqlalchemy import (
    Boolean, CheckConstraint, ForeignKey, Index, Integer, String, Text
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, JSONType, TimestampMixin
from .enums import AgentLanguage, AgentTrack, ProficiencyLevel


class Agent(Base, TimestampMixin):
    """An installable AI agent listed in the agent store.

    Attributes:
        id: Primary key identifier.
        name: Display name.
        version: Semantic version string.
        language: Runtime the agent targets.
        tools: List of ``{"name", "description"}`` objects.
        endpoint: Relative path to the agent's entry file.
        dependencies: List of package requirements.
        auto_load: Whether the agent is loaded without user action.
        tags: Free-form labels.
        is_public: Only public agents appear in listings.
        download_count: Monotonic download counter.
        rating: Star rating, 0-5.
    """

    __tablename__ = "agents"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    version: Mapped[str] = mapped_column(String(50), nullable=False, default="1.0.0")
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    language: Mapped[AgentLanguage] = mapped_column(
        nullable=False,
        default=AgentLanguage.TS,
    )
    tools: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)
    endpoint: Mapped[str] = mapped_column(String(255), nullable=False)
    dependencies: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    auto_load: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    author: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    author_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    repository_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    documentation_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    download_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rating: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("download_count >= 0", name="agents_download_count_positive"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="agents_rating_range"),
        Index("idx_agents_public_downloads", "is_public", "download_count"),
        Index("idx_agents_language", "language"),
    )

    def __repr__(self) -> str:
        return f"<Agent(id={self.id}, name='{self.name}', version='{self.version}')>"


class AgentProfile(Base, TimestampMixin):
    """A named agent persona (Builder, Analyzer, ...) with a set of skills."""

    __tablename__ = "agent_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    agent_profile: Mapped[str] = mapped_column(String(255), nullable=False)
    agent_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    track: Mapped[AgentTrack] = mapped_column(nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    emoji: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)

    skills: Mapped[list["AgentSkill"]] = relationship(
        "AgentSkill",
        back_populates="profile",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="AgentSkill.id",
    )

    def __repr__(self) -> str:
        return f"<AgentProfile(id={self.id}, agent_id='{self.agent_id}', track={self.track.value})>"


class AgentSkill(Base, TimestampMixin):
    """One capability of an agent profile."""

    __tablename__ = "agent_skills"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    agent_profile_id: Mapped[int] = mapped_column(
        ForeignKey("agent_profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    skill_id: Mapped[str] = mapped_column(String(255), nullable=False)
    skill_name: Mapped[str] = mapped_column(String(255), nullable=False)
    skill_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    parameters: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)
    proficiency_level: Mapped[ProficiencyLevel] = mapped_column(
        nullable=False,
        default=ProficiencyLevel.INTERMEDIATE,
    )

    profile: Mapped["AgentProfile"] = relationship("AgentProfile", back_populates="skills")

    __table_args__ = (
        Index("idx_agent_skills_profile", "agent_profile_id"),
    )

    def __repr__(self) -> str:
        return f"<AgentSkill(id={self.id}, skill_id='{self.skill_id}')>"
