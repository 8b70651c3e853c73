"""Dashboard aggregation: fetch every source, merge, filter, section.

Sources are queried concurrently and independently. A source that fails
contributes no cards; its error is reported in the per-source status list
while the other sources' cards are still returned.
"""

import asyncio
import logging
from typing import Iterable, Optional, Sequence

from devportal.models.enums import ContentSource
from devportal.schemas.content import ContentCard, ContentCardFilter, SourceStatus
from devportal.sources import CraftSource, GitHubSource, NotionSource, SourceError

from .normalization import normalize_many

logger = logging.getLogger(__name__)

FAVORITE_FILTER = "favorite"


def filter_content(
    items: Sequence[ContentCard],
    search_query: str = "",
    selected_filters: Iterable[str] = (),
    favorited_ids: Iterable[str] = (),
) -> list[ContentCard]:
    """Apply the dashboard search box and filter chips.

    An item matches the search when the query is a case-insensitive
    substring of its title or description. It passes the filters when no
    filter is selected, when its source is selected, or when ``favorite``
    is selected and the item is favorited. Order is preserved.
    """
    query = search_query.lower()
    filters = set(selected_filters)
    favorites = set(favorited_ids)

    def matches_search(item: ContentCard) -> bool:
        return not query or query in item.title.lower() or query in item.description.lower()

    def matches_filters(item: ContentCard) -> bool:
        if not filters:
            return True
        if item.source.value in filters:
            return True
        return FAVORITE_FILTER in filters and item.id in favorites

    return [item for item in items if matches_search(item) and matches_filters(item)]


def apply_card_filter(items: Sequence[ContentCard], card_filter: Optional[ContentCardFilter]) -> list[ContentCard]:
    """Narrow a listing by card attributes.

    Every given field must match. A card matches ``tags`` when it carries
    at least one of them; ``search_query`` follows ``filter_content``.
    """
    if card_filter is None:
        return list(items)
    wanted_tags = set(card_filter.tags or [])
    selected = filter_content(items, card_filter.search_query or "")
    return [
        item for item in selected
        if (card_filter.source is None or item.source == card_filter.source)
        and (not wanted_tags or wanted_tags.intersection(item.tags))
        and (card_filter.featured is None or item.featured == card_filter.featured)
    ]


def partition_featured(items: Sequence[ContentCard]) -> tuple[list[ContentCard], list[ContentCard]]:
    """Split into (featured, regular), keeping the order inside each tier."""
    featured = [item for item in items if item.featured]
    regular = [item for item in items if not item.featured]
    return featured, regular


def move_item(items: Sequence[ContentCard], from_index: int, to_index: int) -> list[ContentCard]:
    """Return a copy with the item at ``from_index`` moved to ``to_index``."""
    if not 0 <= from_index < len(items):
        raise IndexError(f"from_index {from_index} out of range for {len(items)} items")
    reordered = list(items)
    item = reordered.pop(from_index)
    reordered.insert(max(0, min(to_index, len(reordered))), item)
    return reordered


def apply_card_order(items: Sequence[ContentCard], card_order: Sequence[str]) -> list[ContentCard]:
    """Items named in ``card_order`` first, in that order; the rest keep their order."""
    if not card_order:
        return list(items)
    by_id = {item.id: item for item in items}
    ordered = [by_id[card_id] for card_id in dict.fromkeys(card_order) if card_id in by_id]
    placed = {item.id for item in ordered}
    ordered.extend(item for item in items if item.id not in placed)
    return ordered


def _dedupe(items: Iterable[ContentCard]) -> list[ContentCard]:
    seen: set[str] = set()
    unique = []
    for item in items:
        if item.id not in seen:
            seen.add(item.id)
            unique.append(item)
    return unique


class ContentAggregator:
    """Collects normalized cards from all configured sources."""

    def __init__(self, github: GitHubSource, notion: NotionSource, craft: CraftSource):
        self.github = github
        self.notion = notion
        self.craft = craft

    async def _github_cards(self, username: str, token: Optional[str]) -> list[ContentCard]:
        repos = await self.github.get_repositories(username, token)
        return normalize_many(ContentSource.GITHUB, repos)

    async def _notion_cards(self) -> list[ContentCard]:
        return normalize_many(ContentSource.NOTION, await self.notion.get_pages())

    async def _craft_cards(self) -> list[ContentCard]:
        return normalize_many(ContentSource.CRAFT, await self.craft.fetch_documents())

    async def collect(
        self,
        github_username: Optional[str] = None,
        github_token: Optional[str] = None,
        include: Optional[Iterable[ContentSource]] = None,
        local_items: Sequence[ContentCard] = (),
    ) -> tuple[list[ContentCard], list[SourceStatus]]:
        """Fetch every included source concurrently.

        GitHub is only queried when a username is given. Locally held cards
        are appended after the source cards; the first card wins when ids
        collide.

        Returns:
            The merged cards and one status entry per queried source.
        """
        wanted = set(include) if include is not None else set(ContentSource)
        tasks = {}
        if ContentSource.GITHUB in wanted and github_username:
            tasks[ContentSource.GITHUB] = self._github_cards(github_username, github_token)
        if ContentSource.NOTION in wanted:
            tasks[ContentSource.NOTION] = self._notion_cards()
        if ContentSource.CRAFT in wanted:
            tasks[ContentSource.CRAFT] = self._craft_cards()

        results = await asyncio.gather(*tasks.values(), return_exceptions=True)

        items: list[ContentCard] = []
        statuses: list[SourceStatus] = []
        for source, result in zip(tasks, results):
            if isinstance(result, SourceError):
                logger.warning(f"Source {source.value} failed during aggregation: {result.message}")
                statuses.append(SourceStatus(source=source, success=False, error=result.message))
            elif isinstance(result, Exception):
                logger.error(
                    f"Unexpected error aggregating {source.value}: {result}",
                    exc_info=result,
                )
                statuses.append(SourceStatus(source=source, success=False, error=str(result)))
            else:
                items.extend(result)
                statuses.append(SourceStatus(source=source, success=True, count=len(result)))

        items.extend(local_items)
        merged = _dedupe(items)
        logger.info(f"Aggregated {len(merged)} items from {len(tasks)} sources")
        return merged, statuses
