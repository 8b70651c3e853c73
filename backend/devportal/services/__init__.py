"""Domain services.

Pure helpers (normalization, filtering, document categories) and the
session-bound stores behind the API routes.
"""

from devportal.services.agents import AgentCatalog
from devportal.services.aggregation import (
    ContentAggregator,
    apply_card_filter,
    apply_card_order,
    filter_content,
    move_item,
    partition_featured,
)
from devportal.services.api_keys import ApiKeyService
from devportal.services.categories import (
    DocumentCategory,
    detect_document_category,
    get_all_categories,
    get_category_config,
)
from devportal.services.favorites import FavoritesStore
from devportal.services.normalization import normalize_item, render_block_tree
from devportal.services.preferences import PreferencesService

__all__ = [
    "AgentCatalog",
    "ApiKeyService",
    "ContentAggregator",
    "DocumentCategory",
    "FavoritesStore",
    "PreferencesService",
    "apply_card_filter",
    "apply_card_order",
    "detect_document_category",
    "filter_content",
    "get_all_categories",
    "get_category_config",
    "move_item",
    "normalize_item",
    "partition_featured",
    "render_block_tree",
]
