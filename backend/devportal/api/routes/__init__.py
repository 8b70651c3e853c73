"""API routers, one per procedure group."""

from devportal.api.routes.agents import router as agents_router
from devportal.api.routes.api_keys import router as api_keys_router
from devportal.api.routes.auth import router as auth_router
from devportal.api.routes.content import router as content_router
from devportal.api.routes.craft import router as craft_router
from devportal.api.routes.favorites import router as favorites_router
from devportal.api.routes.github import router as github_router
from devportal.api.routes.notion import router as notion_router
from devportal.api.routes.preferences import router as preferences_router

ROUTERS = [
    auth_router,
    github_router,
    notion_router,
    craft_router,
    content_router,
    favorites_router,
    agents_router,
    preferences_router,
    api_keys_router,
]

__all__ = ["ROUTERS"]
