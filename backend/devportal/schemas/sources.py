"""Schemas for data pulled from the upstream content sources.

GitHub and Notion payloads are reshaped into compact models here. Craft
payloads keep Craft's own (camelCase) field names on the wire.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import BaseSchema


def _as_object(data: Any) -> dict[str, Any]:
    return data if isinstance(data, dict) else {}


# =============================================================================
# GitHub
# =============================================================================

class GitHubRepo(BaseSchema):
    """Repository fields the portal cares about."""

    id: int
    name: str
    description: Optional[str] = None
    url: str
    stars: int = 0
    language: Optional[str] = None
    topics: list[str] = Field(default_factory=list)
    updated_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: Any) -> "GitHubRepo":
        """Build from a GitHub REST repository object.

        Raises:
            ValidationError: If a required field is missing or malformed.
        """
        data = _as_object(data)
        return cls.model_validate({
            "id": data.get("id"),
            "name": data.get("name"),
            "description": data.get("description"),
            "url": data.get("html_url"),
            "stars": data.get("stargazers_count") or 0,
            "language": data.get("language"),
            "topics": data.get("topics") or [],
            "updated_at": data.get("updated_at"),
        })


class GitHubUser(BaseSchema):
    login: str
    name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0

    @classmethod
    def from_api(cls, data: Any) -> "GitHubUser":
        data = _as_object(data)
        return cls.model_validate({
            "login": data.get("login"),
            "name": data.get("name"),
            "bio": data.get("bio"),
            "avatar_url": data.get("avatar_url"),
            "public_repos": data.get("public_repos") or 0,
            "followers": data.get("followers") or 0,
            "following": data.get("following") or 0,
        })


class GitHubRepoListResponse(BaseSchema):
    """Soft-fail envelope for repository listings and searches."""

    success: bool
    data: list[GitHubRepo] = Field(default_factory=list)
    count: int = 0
    error: Optional[str] = None


class GitHubUserResponse(BaseSchema):
    success: bool
    data: Optional[GitHubUser] = None
    error: Optional[str] = None


# =============================================================================
# Notion
# =============================================================================

class NotionPage(BaseSchema):
    """A database page reduced to its title and timestamps."""

    id: str
    title: str
    url: str
    created_time: Optional[str] = None
    last_edited_time: Optional[str] = None
    archived: bool = False


class NotionBlock(BaseSchema):
    """A child block flattened to its plain text."""

    id: str
    type: str
    text: str = ""
    has_children: bool = False


class NotionDatabaseInfo(BaseSchema):
    id: str
    title: str
    url: Optional[str] = None
    created_time: Optional[str] = None
    last_edited_time: Optional[str] = None


# =============================================================================
# Craft
# =============================================================================

class CraftModel(BaseModel):
    """Craft objects are passed through; unknown keys are preserved."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class CraftDocument(CraftModel):
    id: str
    title: str = ""
    is_deleted: bool = Field(default=False, alias="isDeleted")


class CraftBlock(CraftModel):
    """A block and, recursively, the blocks it contains."""

    id: str
    type: str = "text"
    text_style: Optional[str] = Field(default=None, alias="textStyle")
    markdown: str = ""
    content: list["CraftBlock"] = Field(default_factory=list)


class CraftPathEntry(CraftModel):
    id: str
    content: str = ""


class CraftSearchResult(CraftModel):
    """A search hit: the matching markdown plus where it sits."""

    document_id: Optional[str] = Field(default=None, alias="documentId")
    block_id: Optional[str] = Field(default=None, alias="blockId")
    markdown: str = ""
    page_block_path: list[CraftPathEntry] = Field(default_factory=list, alias="pageBlockPath")
    before_blocks: list[dict[str, Any]] = Field(default_factory=list, alias="beforeBlocks")
    after_blocks: list[dict[str, Any]] = Field(default_factory=list, alias="afterBlocks")


class CraftCollection(CraftModel):
    key: Optional[str] = None
    name: str = ""
    document_id: Optional[str] = Field(default=None, alias="documentId")
    collection_schema: dict[str, Any] = Field(default_factory=dict, alias="schema")


class CraftCollectionItem(CraftModel):
    id: str
    title: str = ""
    properties: dict[str, Any] = Field(default_factory=dict)
    content: list[CraftBlock] = Field(default_factory=list)
