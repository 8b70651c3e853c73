"""Notion routes.

Missing credentials and upstream errors are logged and produce an empty
list (or ``null``), so the documentation panel degrades instead of
failing.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Query

from devportal.api.dependencies import NotionDep
from devportal.schemas.sources import NotionBlock, NotionDatabaseInfo, NotionPage
from devportal.sources import SourceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notion", tags=["notion"])


@router.get("/pages", response_model=list[NotionPage])
async def get_pages(notion: NotionDep) -> list[NotionPage]:
    try:
        return await notion.get_pages()
    except SourceError as e:
        logger.error(f"Failed to fetch Notion pages: {e.message}")
        return []


@router.get("/pages/{page_id}/content", response_model=list[NotionBlock])
async def get_page_content(page_id: str, notion: NotionDep) -> list[NotionBlock]:
    try:
        return await notion.get_page_content(page_id)
    except SourceError as e:
        logger.error(f"Failed to fetch Notion page content for {page_id}: {e.message}")
        return []


@router.get("/search", response_model=list[NotionPage])
async def search_pages(
    notion: NotionDep,
    query: Annotated[str, Query(min_length=1)],
) -> list[NotionPage]:
    try:
        return await notion.search_pages(query)
    except SourceError as e:
        logger.error(f"Failed to search Notion pages: {e.message}")
        return []


@router.get("/database", response_model=Optional[NotionDatabaseInfo])
async def get_database_info(notion: NotionDep) -> Optional[NotionDatabaseInfo]:
    try:
        return await notion.get_database_info()
    except SourceError as e:
        logger.error(f"Failed to fetch Notion database info: {e.message}")
        return None
