"""Mapping of upstream records onto ``ContentCard``.

Each source has one normalizer, registered under its ``ContentSource``.
Normalizers fill missing fields with neutral values instead of failing;
records that should not be listed (archived, deleted) map to ``None``.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError

from devportal.config import settings
from devportal.models.enums import ContentSource
from devportal.schemas.content import MAX_TAG_LENGTH, MAX_TAGS, ContentCard
from devportal.schemas.sources import CraftBlock, CraftDocument, GitHubRepo, NotionPage

from .categories import DocumentCategory, detect_document_category, get_category_config

logger = logging.getLogger(__name__)

PLACEHOLDER_DESCRIPTION = "No description available"
UNTITLED = "Untitled"
FEATURED_STAR_THRESHOLD = 100
MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 1000

Normalizer = Callable[[Any], Optional[ContentCard]]


def clamp_tags(tags: list[str]) -> list[str]:
    """Keep at most ``MAX_TAGS`` non-empty tags, each cut to ``MAX_TAG_LENGTH``."""
    cleaned = [tag.strip()[:MAX_TAG_LENGTH] for tag in tags if tag and tag.strip()]
    return cleaned[:MAX_TAGS]


def format_last_updated(value: Optional[str]) -> Optional[str]:
    """ISO timestamps become ``YYYY-MM-DD``; anything else is passed through."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


def _title(value: Optional[str]) -> str:
    value = (value or "").strip()
    return value[:MAX_TITLE_LENGTH] if value else UNTITLED


def _description(value: Optional[str]) -> str:
    value = (value or "").strip()
    return value[:MAX_DESCRIPTION_LENGTH] if value else PLACEHOLDER_DESCRIPTION


def normalize_github_repo(repo: GitHubRepo) -> ContentCard:
    """Topics become tags (falling back to the language); >100 stars is featured."""
    if repo.topics:
        tags = repo.topics
    elif repo.language:
        tags = [repo.language]
    else:
        tags = []
    return ContentCard(
        id=f"github-{repo.id}",
        title=_title(repo.name),
        description=_description(repo.description),
        source=ContentSource.GITHUB,
        url=repo.url,
        tags=clamp_tags(tags),
        last_updated=format_last_updated(repo.updated_at),
        featured=repo.stars > FEATURED_STAR_THRESHOLD,
    )


def normalize_notion_page(page: NotionPage) -> Optional[ContentCard]:
    if page.archived:
        return None
    return ContentCard(
        id=f"notion-{page.id}",
        title=_title(page.title),
        description=PLACEHOLDER_DESCRIPTION,
        source=ContentSource.NOTION,
        url=page.url,
        tags=[],
        last_updated=format_last_updated(page.last_edited_time),
        featured=False,
    )


def normalize_craft_document(document: CraftDocument, api_base: Optional[str] = None) -> Optional[ContentCard]:
    """Craft documents are tagged with their detected category, if any."""
    if document.is_deleted:
        return None
    title = _title(document.title)
    category = detect_document_category(title)
    tags = [] if category is DocumentCategory.OTHER else [get_category_config(category).label]
    base = (api_base or settings.craft_api_base).rstrip("/")
    return ContentCard(
        id=f"craft-{document.id}",
        title=title,
        description=PLACEHOLDER_DESCRIPTION,
        source=ContentSource.CRAFT,
        url=f"{base}/blocks?id={document.id}",
        tags=tags,
        featured=False,
    )


NORMALIZERS: dict[ContentSource, tuple[type[BaseModel], Normalizer]] = {
    ContentSource.GITHUB: (GitHubRepo, normalize_github_repo),
    ContentSource.NOTION: (NotionPage, normalize_notion_page),
    ContentSource.CRAFT: (CraftDocument, normalize_craft_document),
}


def normalize_item(source: ContentSource, raw: Any) -> Optional[ContentCard]:
    """Normalize one record from ``source``.

    ``raw`` is the source's record model, or a dict in that model's shape.
    Returns ``None`` for skipped records and for records that cannot be
    turned into a valid card (logged).
    """
    entry = NORMALIZERS.get(source)
    if entry is None:
        logger.warning(f"No normalizer registered for source {source.value}")
        return None
    model, normalizer = entry
    try:
        if not isinstance(raw, model):
            raw = model.model_validate(raw)
        return normalizer(raw)
    except ValidationError as e:
        logger.warning(f"Dropping malformed {source.value} record: {e.error_count()} errors")
        return None


def normalize_many(source: ContentSource, records: list[Any]) -> list[ContentCard]:
    cards = (normalize_item(source, record) for record in records)
    return [card for card in cards if card is not None]


def render_block_tree(block: CraftBlock, max_depth: int = 5) -> str:
    """Render a Craft block tree as indented markdown.

    Each nesting level adds two spaces. Blocks nested deeper than
    ``max_depth`` are left out.
    """
    lines: list[str] = []

    def visit(node: CraftBlock, depth: int) -> None:
        indent = "  " * depth
        for line in node.markdown.splitlines():
            lines.append(f"{indent}{line}")
        if depth < max_depth:
            for child in node.content:
                visit(child, depth + 1)

    visit(block, 0)
    return "\n".join(lines)
