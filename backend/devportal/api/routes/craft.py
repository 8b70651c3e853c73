"""Craft routes. The adapter already turns failures into ``[]`` / ``null``."""

from typing import Annotated, Any, Literal, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from devportal.api.dependencies import CraftDep
from devportal.middleware.error_handler import NotFoundException
from devportal.schemas.sources import (
    CraftBlock,
    CraftCollection,
    CraftCollectionItem,
    CraftDocument,
    CraftSearchResult,
)
from devportal.services.categories import CATEGORY_CONFIG, DocumentCategory, detect_document_category
from devportal.services.normalization import render_block_tree

router = APIRouter(prefix="/craft", tags=["craft"])

FilterMode = Literal["include", "exclude"]


class CategoryInfo(BaseModel):
    category: DocumentCategory
    label: str
    icon: str
    keywords: list[str]


class RenderedDocument(BaseModel):
    id: str
    category: DocumentCategory
    markdown: str


@router.get("/documents", response_model=list[CraftDocument])
async def get_documents(craft: CraftDep) -> list[CraftDocument]:
    return await craft.get_documents()


@router.get("/documents/search", response_model=list[CraftSearchResult])
async def search_documents(
    craft: CraftDep,
    query: Annotated[str, Query(min_length=1)],
    document_ids: Annotated[Optional[list[str]], Query()] = None,
    document_filter_mode: FilterMode = "include",
) -> list[CraftSearchResult]:
    return await craft.search_documents(query, document_ids, document_filter_mode)


@router.get("/documents/{document_id}/rendered", response_model=RenderedDocument)
async def render_document(
    document_id: str,
    craft: CraftDep,
    max_depth: Annotated[int, Query(ge=0, le=10)] = 5,
) -> RenderedDocument:
    """A document's block tree as indented markdown, with its detected category."""
    root = await craft.get_blocks(document_id)
    if root is None:
        raise NotFoundException("Craft document not found", resource_type="craft_document", resource_id=document_id)
    title = root.markdown.lstrip("# ").strip()
    return RenderedDocument(
        id=document_id,
        category=detect_document_category(title),
        markdown=render_block_tree(root, max_depth=max_depth),
    )


@router.get("/blocks", response_model=Optional[CraftBlock])
async def get_blocks(
    craft: CraftDep,
    id: Annotated[str, Query(min_length=1)],
    max_depth: int = -1,
    fetch_metadata: bool = False,
) -> Optional[CraftBlock]:
    return await craft.get_blocks(id, max_depth, fetch_metadata)


@router.get("/blocks/search", response_model=list[CraftSearchResult])
async def search_blocks(
    craft: CraftDep,
    document_id: str,
    pattern: Annotated[str, Query(min_length=1)],
    case_sensitive: bool = False,
    before_block_count: Annotated[int, Query(ge=0)] = 1,
    after_block_count: Annotated[int, Query(ge=0)] = 1,
) -> list[CraftSearchResult]:
    return await craft.search_blocks(
        document_id,
        pattern,
        case_sensitive=case_sensitive,
        before_block_count=before_block_count,
        after_block_count=after_block_count,
    )


@router.get("/collections", response_model=list[CraftCollection])
async def get_collections(
    craft: CraftDep,
    document_ids: Annotated[Optional[list[str]], Query()] = None,
    document_filter_mode: FilterMode = "include",
) -> list[CraftCollection]:
    return await craft.get_collections(document_ids, document_filter_mode)


@router.get("/collections/{collection_id}/schema")
async def get_collection_schema(
    collection_id: str,
    craft: CraftDep,
    format: Literal["json-schema-items", "schema"] = "json-schema-items",
) -> Optional[dict[str, Any]]:
    return await craft.get_collection_schema(collection_id, format)


@router.get("/collections/{collection_id}/items", response_model=list[CraftCollectionItem])
async def get_collection_items(
    collection_id: str,
    craft: CraftDep,
    max_depth: int = -1,
) -> list[CraftCollectionItem]:
    return await craft.get_collection_items(collection_id, max_depth)


@router.get("/categories", response_model=list[CategoryInfo])
async def list_categories() -> list[CategoryInfo]:
    """Document categories, in detection order."""
    return [
        CategoryInfo(
            category=category,
            label=config.label,
            icon=config.icon,
            keywords=list(config.keywords),
        )
        for category, config in CATEGORY_CONFIG.items()
    ]
