"""
DevPortal Test Fixtures
=======================

Pytest fixtures for the DevPortal API: an in-memory SQLite database,
the FastAPI app wired to it, authenticated users, and a fake upstream
HTTP server standing in for GitHub, Notion and Craft.

Example:
    async def test_count(async_client, auth_headers):
        response = await async_client.get("/api/v1/favorites/count", headers=auth_headers)
        assert response.json() == {"success": True, "count": 0}
"""

import os
from typing import Any, AsyncGenerator, Callable, Optional

# Set testing environment variables before any devportal import
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from devportal.auth import create_access_token, hash_password
from devportal.database import get_db
from devportal.main import app as portal_app
from devportal.models import Base, User
from devportal.sources import SourceConfig

from tests.factories import UserFactory

TEST_PASSWORD = "Passw0rd!"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def async_engine():
    """
    A fresh in-memory database per test.

    StaticPool keeps a single connection so every session sees the same
    database; foreign keys are switched on so cascades behave as on
    PostgreSQL.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(db_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging data and calling services directly."""
    async with db_session_factory() as session:
        yield session


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(db_session_factory) -> FastAPI:
    """
    The DevPortal application with its database dependency pointed at
    the test database. Source adapters can be overridden per test.
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with db_session_factory() as session:
            yield session

    portal_app.dependency_overrides[get_db] = override_get_db
    yield portal_app
    portal_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# =============================================================================
# Authentication Fixtures
# =============================================================================

async def _persist_user(session: AsyncSession, **kwargs: Any) -> User:
    user = UserFactory.build(password_hash=hash_password(TEST_PASSWORD), **kwargs)
    session.add(user)
    await session.commit()
    return user


@pytest_asyncio.fixture
async def test_user(db_session) -> User:
    return await _persist_user(db_session)


@pytest_asyncio.fixture
async def other_user(db_session) -> User:
    return await _persist_user(db_session)


@pytest_asyncio.fixture
async def admin_user(db_session) -> User:
    return await _persist_user(db_session, admin=True)


def bearer(user: User) -> dict[str, str]:
    token = create_access_token(user.id, {"role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_user) -> dict[str, str]:
    return bearer(test_user)


@pytest.fixture
def admin_headers(admin_user) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture
def other_headers(other_user) -> dict[str, str]:
    return bearer(other_user)


# =============================================================================
# Fake Upstream Fixtures
# =============================================================================

class FakeUpstream:
    """
    Minimal HTTP server that answers with canned JSON.

    Register responses with ``respond(method, path, body, status)``, or
    ``respond_text`` for a body that is not JSON;
    every request is recorded in ``requests`` for assertions. Unregistered
    paths answer 404.
    """

    def __init__(self):
        self.responses: dict[tuple[str, str], Callable[[], web.Response]] = {}
        self.requests: list[dict[str, Any]] = []
        self.server: Optional[TestServer] = None

    def respond(self, method: str, path: str, body: Any, status: int = 200) -> None:
        self.responses[(method.upper(), path)] = lambda: web.json_response(body, status=status)

    def respond_text(self, method: str, path: str, text: str, content_type: str = "text/html") -> None:
        self.responses[(method.upper(), path)] = lambda: web.Response(text=text, content_type=content_type)

    async def _handle(self, request: web.Request) -> web.Response:
        body = await request.json() if request.can_read_body else None
        self.requests.append({
            "method": request.method,
            "path": request.path,
            "query": request.query,
            "headers": request.headers,
            "json": body,
        })
        make_response = self.responses.get((request.method, request.path))
        if make_response is None:
            return web.json_response({"message": "Not Found"}, status=404)
        return make_response()

    async def start(self) -> None:
        application = web.Application()
        application.router.add_route("*", "/{tail:.*}", self._handle)
        self.server = TestServer(application)
        await self.server.start_server()

    async def close(self) -> None:
        if self.server is not None:
            await self.server.close()

    @property
    def base_url(self) -> str:
        return str(self.server.make_url("/"))

    def config(self) -> SourceConfig:
        return SourceConfig(base_url=self.base_url, timeout_seconds=5)


@pytest_asyncio.fixture
async def upstream() -> AsyncGenerator[FakeUpstream, None]:
    fake = FakeUpstream()
    await fake.start()
    yield fake
    await fake.close()
