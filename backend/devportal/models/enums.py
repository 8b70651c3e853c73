"""Enum definitions shared by the ORM models and the API schemas."""

import enum


class ContentSource(str, enum.Enum):
    """Origins of a normalized content item."""

    GITHUB = "github"
    GITBOOK = "gitbook"
    NOTION = "notion"
    CRAFT = "craft"


class FavoriteContentType(str, enum.Enum):
    """Content types accepted on a favorite record."""

    GITHUB = "github"
    GITBOOK = "gitbook"
    NOTION = "notion"
    OTHER = "other"

    @classmethod
    def from_source(cls, source: ContentSource) -> "FavoriteContentType":
        """Map a content source onto the favorite type it is stored under."""
        try:
            return cls(source.value)
        except ValueError:
            return cls.OTHER


class UserRole(str, enum.Enum):
    """User permission levels for dashboard access."""

    USER = "user"
    ADMIN = "admin"


class AgentLanguage(str, enum.Enum):
    """Runtime an agent package is written for."""

    JS = "js"
    TS = "ts"
    PYTHON = "python"
    UV = "uv"
    JSON = "json"
    YAML = "yaml"


class AgentTrack(str, enum.Enum):
    """Track an agent profile belongs to."""

    BUILDER = "Builder"
    ANALYZER = "Analyzer"
    DESIGNER = "Designer"
    OPTIMIZER = "Optimizer"
    INTEGRATOR = "Integrator"


class ProficiencyLevel(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"
