"""Craft multi-document API source.

The API link needs no authentication. The public methods never raise:
a failed call is logged and yields ``[]`` (listings) or ``None`` (single
objects). ``fetch_documents`` is the raising variant used by aggregation,
which reports per-source failures itself.
"""

import logging
from typing import Any, Literal, Optional

from pydantic import ValidationError

from devportal.models.enums import ContentSource
from devportal.schemas.sources import (
    CraftBlock,
    CraftCollection,
    CraftCollectionItem,
    CraftDocument,
    CraftSearchResult,
)

from .base import BaseSource, SourceError

logger = logging.getLogger(__name__)

FilterMode = Literal["include", "exclude"]
SchemaFormat = Literal["json-schema-items", "schema"]


def _document_filter(document_ids: Optional[list[str]], mode: FilterMode) -> list[tuple[str, Any]]:
    params: list[tuple[str, Any]] = [("documentFilterMode", mode)]
    params.extend(("documentIds", doc_id) for doc_id in document_ids or [])
    return params


class CraftSource(BaseSource):
    """Adapter for a Craft API link."""

    source = ContentSource.CRAFT
    display_name = "Craft"

    def block_url(self, block_id: str) -> str:
        """API URL serving the block tree of a document or block."""
        return f"{self.config.base_url.rstrip('/')}/blocks?id={block_id}"

    async def fetch_documents(self) -> list[CraftDocument]:
        data = await self._request("GET", "/documents")
        with self._parsing("documents"):
            return [CraftDocument.model_validate(item) for item in self._list_of(data, "items")]

    async def get_documents(self) -> list[CraftDocument]:
        try:
            return await self.fetch_documents()
        except SourceError as e:
            logger.error(f"Failed to fetch Craft documents: {e}")
            return []

    async def get_blocks(
        self,
        block_id: str,
        max_depth: int = -1,
        fetch_metadata: bool = False,
    ) -> Optional[CraftBlock]:
        """Block tree rooted at ``block_id``; ``max_depth=-1`` means unlimited."""
        try:
            data = await self._request(
                "GET",
                "/blocks",
                params={"id": block_id, "maxDepth": max_depth, "fetchMetadata": fetch_metadata},
            )
            return CraftBlock.model_validate(data)
        except (SourceError, ValidationError) as e:
            logger.error(f"Failed to fetch Craft blocks for {block_id}: {e}")
            return None

    async def search_documents(
        self,
        query: str,
        document_ids: Optional[list[str]] = None,
        document_filter_mode: FilterMode = "include",
    ) -> list[CraftSearchResult]:
        """Full-text search across documents."""
        params = [("include", query)] + _document_filter(document_ids, document_filter_mode)
        return await self._search("/documents/search", params)

    async def search_blocks(
        self,
        document_id: str,
        pattern: str,
        case_sensitive: bool = False,
        before_block_count: int = 1,
        after_block_count: int = 1,
    ) -> list[CraftSearchResult]:
        """Search inside one document, with surrounding blocks for context."""
        params = {
            "documentId": document_id,
            "pattern": pattern,
            "caseSensitive": case_sensitive,
            "beforeBlockCount": before_block_count,
            "afterBlockCount": after_block_count,
        }
        return await self._search("/blocks/search", params)

    async def _search(self, path: str, params) -> list[CraftSearchResult]:
        try:
            data = await self._request("GET", path, params=params)
            return [CraftSearchResult.model_validate(item) for item in self._list_of(data, "items")]
        except (SourceError, ValidationError) as e:
            logger.error(f"Craft search failed ({path}): {e}")
            return []

    async def get_collections(
        self,
        document_ids: Optional[list[str]] = None,
        document_filter_mode: FilterMode = "include",
    ) -> list[CraftCollection]:
        try:
            data = await self._request(
                "GET",
                "/collections",
                params=_document_filter(document_ids, document_filter_mode),
            )
            return [CraftCollection.model_validate(item) for item in self._list_of(data, "items")]
        except (SourceError, ValidationError) as e:
            logger.error(f"Failed to fetch Craft collections: {e}")
            return []

    async def get_collection_schema(
        self,
        collection_id: str,
        schema_format: SchemaFormat = "json-schema-items",
    ) -> Optional[dict[str, Any]]:
        try:
            data = await self._request(
                "GET",
                f"/collections/{collection_id}/schema",
                params={"format": schema_format},
            )
            return data if isinstance(data, dict) else None
        except SourceError as e:
            logger.error(f"Failed to fetch Craft collection schema {collection_id}: {e}")
            return None

    async def get_collection_items(
        self,
        collection_id: str,
        max_depth: int = -1,
    ) -> list[CraftCollectionItem]:
        try:
            data = await self._request(
                "GET",
                f"/collections/{collection_id}/items",
                params={"maxDepth": max_depth},
            )
            return [CraftCollectionItem.model_validate(item) for item in self._list_of(data, "items")]
        except (SourceError, ValidationError) as e:
            logger.error(f"Failed to fetch Craft collection items {collection_id}: {e}")
            return []
