"""GitHub routes. Upstream failures are returned as ``success: false``."""

import logging
from typing import Annotated, Literal, Optional

from fastapi import APIRouter, Query

from devportal.api.dependencies import GitHubDep, GitHubTokenDep
from devportal.schemas.sources import GitHubRepoListResponse, GitHubUserResponse
from devportal.sources import SourceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/github", tags=["github"])


@router.get("/repositories", response_model=GitHubRepoListResponse)
async def get_repositories(
    github: GitHubDep,
    token: GitHubTokenDep,
    username: Annotated[str, Query(min_length=1)],
) -> GitHubRepoListResponse:
    """Repositories of a user, most recently updated first."""
    try:
        repos = await github.get_repositories(username, token)
    except SourceError as e:
        logger.error(f"Failed to fetch GitHub repositories for {username}: {e.message}")
        return GitHubRepoListResponse(success=False, error=e.message)
    return GitHubRepoListResponse(success=True, data=repos, count=len(repos))


@router.get("/users/{username}", response_model=GitHubUserResponse)
async def get_user(
    username: str,
    github: GitHubDep,
    token: GitHubTokenDep,
) -> GitHubUserResponse:
    try:
        user = await github.get_user(username, token)
    except SourceError as e:
        logger.error(f"Failed to fetch GitHub user {username}: {e.message}")
        return GitHubUserResponse(success=False, error=e.message)
    return GitHubUserResponse(success=True, data=user)


@router.get("/search", response_model=GitHubRepoListResponse)
async def search_repositories(
    github: GitHubDep,
    token: GitHubTokenDep,
    query: Annotated[str, Query(min_length=1)],
    language: Optional[str] = None,
    sort: Optional[Literal["stars", "forks", "updated"]] = None,
) -> GitHubRepoListResponse:
    """Search public repositories; ``count`` is GitHub's total match count."""
    try:
        repos, total = await github.search_repositories(query, language, sort, token)
    except SourceError as e:
        logger.error(f"GitHub search failed for {query!r}: {e.message}")
        return GitHubRepoListResponse(success=False, error=e.message)
    return GitHubRepoListResponse(success=True, data=repos, count=total)
