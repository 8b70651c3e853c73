"""GitHub REST API source.

Lists a user's repositories, reads a user profile and searches public
repositories. Calls are unauthenticated unless a token is passed or a
server-wide default token is configured.
"""

import logging
from typing import Literal, Optional

from devportal.models.enums import ContentSource
from devportal.schemas.sources import GitHubRepo, GitHubUser

from .base import BaseSource, SourceConfig

logger = logging.getLogger(__name__)

SearchSort = Literal["stars", "forks", "updated"]

REPOS_PER_PAGE = 30


class GitHubSource(BaseSource):
    """Adapter for api.github.com."""

    source = ContentSource.GITHUB
    display_name = "GitHub"

    def __init__(self, config: SourceConfig, default_token: Optional[str] = None):
        super().__init__(config)
        self.default_token = default_token

    def _headers(self, token: Optional[str] = None) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github.v3+json"}
        token = token or self.default_token
        if token:
            headers["Authorization"] = f"token {token}"
        return headers

    def _error_message(self, status: int, reason: str, body: str) -> str:
        return f"GitHub API error: {reason}"

    async def get_repositories(self, username: str, token: Optional[str] = None) -> list[GitHubRepo]:
        """Most recently updated repositories of ``username``."""
        data = await self._request(
            "GET",
            f"/users/{username}/repos",
            params={"sort": "updated", "per_page": REPOS_PER_PAGE},
            token=token,
        )
        with self._parsing("repositories"):
            repos = [GitHubRepo.from_api(item) for item in self._list_of(data)]
        logger.debug(f"Fetched {len(repos)} repositories for {username}")
        return repos

    async def get_user(self, username: str, token: Optional[str] = None) -> GitHubUser:
        data = await self._request("GET", f"/users/{username}", token=token)
        with self._parsing("user"):
            return GitHubUser.from_api(data)

    async def search_repositories(
        self,
        query: str,
        language: Optional[str] = None,
        sort: Optional[SearchSort] = None,
        token: Optional[str] = None,
    ) -> tuple[list[GitHubRepo], int]:
        """Search public repositories.

        Returns:
            The first page of matches and the upstream ``total_count``.
        """
        q = f"{query} language:{language}" if language else query
        data = await self._request(
            "GET",
            "/search/repositories",
            params={"q": q, "sort": sort or "stars", "per_page": REPOS_PER_PAGE},
            token=token,
        )
        with self._parsing("search results"):
            repos = [GitHubRepo.from_api(item) for item in self._list_of(data, "items")]
        total = data.get("total_count")
        return repos, total if isinstance(total, int) else len(repos)
