"""External content sources.

One adapter per upstream (GitHub, Notion, Craft), all built on
``BaseSource``'s aiohttp session handling.
"""

from devportal.sources.base import (
    BaseSource,
    ExternalAPIError,
    SourceConfig,
    SourceConfigurationError,
    SourceError,
)
from devportal.sources.craft import CraftSource
from devportal.sources.github import GitHubSource
from devportal.sources.notion import NotionSource

__all__ = [
    "BaseSource",
    "SourceConfig",
    "SourceError",
    "SourceConfigurationError",
    "ExternalAPIError",
    "GitHubSource",
    "NotionSource",
    "CraftSource",
]
