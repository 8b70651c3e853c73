"""Notion API source.

Reads the pages of one configured database. Every call needs the
integration token; database-level calls also need the database id.
Neither is required at startup.
"""

import logging
from typing import Any, Optional

from devportal.models.enums import ContentSource
from devportal.schemas.sources import NotionBlock, NotionDatabaseInfo, NotionPage

from .base import BaseSource, SourceConfig, SourceConfigurationError

logger = logging.getLogger(__name__)

PAGE_SIZE = 100
SEARCH_PAGE_SIZE = 50

TEXT_BLOCK_TYPES = frozenset({
    "paragraph",
    "heading_1",
    "heading_2",
    "heading_3",
    "bulleted_list_item",
    "numbered_list_item",
})


def _plain_text(rich_text: Any) -> str:
    if not isinstance(rich_text, list):
        return ""
    return "".join(part.get("plain_text") or "" for part in rich_text if isinstance(part, dict))


def extract_page_title(page: dict[str, Any]) -> str:
    """Title of a page: the title property, else the first rich text, else "Untitled"."""
    properties = page.get("properties")
    if not isinstance(properties, dict):
        return "Untitled"
    props = [prop for prop in properties.values() if isinstance(prop, dict)]
    for prop in props:
        if prop.get("type") == "title" and prop.get("title"):
            return _plain_text(prop["title"])
    for prop in props:
        if prop.get("type") == "rich_text" and prop.get("rich_text"):
            return _plain_text(prop["rich_text"])
    return "Untitled"


def extract_block_text(block: dict[str, Any]) -> str:
    """Plain text of a text-bearing block; other block types yield ''."""
    block_type = block.get("type")
    if block_type not in TEXT_BLOCK_TYPES:
        return ""
    body = block.get(block_type)
    return _plain_text(body.get("rich_text")) if isinstance(body, dict) else ""


def _to_page(page: Any) -> NotionPage:
    page = page if isinstance(page, dict) else {}
    return NotionPage.model_validate({
        "id": page.get("id"),
        "title": extract_page_title(page),
        "url": page.get("url") or "",
        "created_time": page.get("created_time"),
        "last_edited_time": page.get("last_edited_time"),
        "archived": page.get("archived", False),
    })


class NotionSource(BaseSource):
    """Adapter for api.notion.com."""

    source = ContentSource.NOTION
    display_name = "Notion"

    def __init__(
        self,
        config: SourceConfig,
        token: Optional[str] = None,
        database_id: Optional[str] = None,
        notion_version: str = "2022-06-28",
    ):
        super().__init__(config)
        self.token = token
        self.database_id = database_id
        self.notion_version = notion_version

    def _headers(self, token: Optional[str] = None) -> dict[str, str]:
        if not self.token:
            raise SourceConfigurationError("Notion token not configured", source=self.source)
        return {
            "Authorization": f"Bearer {self.token}",
            "Notion-Version": self.notion_version,
        }

    def _error_message(self, status: int, reason: str, body: str) -> str:
        return f"Notion API error: {status} {reason} - {body}"

    def _require_database(self) -> str:
        if not self.database_id:
            raise SourceConfigurationError("Notion database ID not configured", source=self.source)
        return self.database_id

    async def get_pages(self) -> list[NotionPage]:
        """First page of rows from the configured database."""
        database_id = self._require_database()
        data = await self._request(
            "POST",
            f"/databases/{database_id}/query",
            json={"page_size": PAGE_SIZE},
        )
        with self._parsing("pages"):
            return [_to_page(page) for page in self._list_of(data, "results")]

    async def get_page_content(self, page_id: str) -> list[NotionBlock]:
        """Top-level blocks of a page, flattened to text."""
        data = await self._request(
            "GET",
            f"/blocks/{page_id}/children",
            params={"page_size": PAGE_SIZE},
        )
        blocks = [block for block in self._list_of(data, "results") if isinstance(block, dict)]
        with self._parsing("blocks"):
            return [
                NotionBlock.model_validate({
                    "id": block.get("id"),
                    "type": block.get("type") or "unsupported",
                    "text": extract_block_text(block),
                    "has_children": block.get("has_children", False),
                })
                for block in blocks
            ]

    async def search_pages(self, query: str) -> list[NotionPage]:
        """Pages whose ``Name`` property contains ``query``."""
        database_id = self._require_database()
        data = await self._request(
            "POST",
            f"/databases/{database_id}/query",
            json={
                "filter": {"property": "Name", "rich_text": {"contains": query}},
                "page_size": SEARCH_PAGE_SIZE,
            },
        )
        with self._parsing("pages"):
            return [_to_page(page) for page in self._list_of(data, "results")]

    async def get_database_info(self) -> NotionDatabaseInfo:
        database_id = self._require_database()
        data = await self._request("GET", f"/databases/{database_id}")
        if not isinstance(data, dict):
            raise self._invalid_response("expected a database object")
        title = "".join(
            (part.get("text") or {}).get("content", "")
            for part in self._list_of(data, "title")
            if isinstance(part, dict) and part.get("type") == "text"
        )
        with self._parsing("database"):
            return NotionDatabaseInfo.model_validate({
                "id": data.get("id"),
                "title": title,
                "url": data.get("url"),
                "created_time": data.get("created_time"),
                "last_edited_time": data.get("last_edited_time"),
            })
