"""DevPortal FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager
from typing import Annotated, AsyncGenerator

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devportal.api.dependencies import close_sources
from devportal.api.routes import ROUTERS
from devportal.config import settings
from devportal.database import create_tables, dispose_engine, get_db
from devportal.middleware.error_handler import (
    PortalException,
    ServiceUnavailableException,
    general_exception_handler,
    portal_exception_handler,
    validation_exception_handler,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting DevPortal API...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")
    if settings.auto_create_tables and settings.environment in ("development", "testing"):
        await create_tables()
    yield
    logger.info("Shutting down DevPortal API...")
    await close_sources()
    await dispose_engine()


def create_application() -> FastAPI:
    """Factory function to create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="DevPortal content aggregation and agent store API",
        version=settings.app_version,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_exception_handler(PortalException, portal_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    for router in ROUTERS:
        app.include_router(router, prefix="/api/v1")

    return app


app = create_application()


@app.get("/", tags=["Root"])
async def root() -> dict:
    """Root endpoint returning API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "status": "operational",
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    return {
        "status": "healthy",
        "version": settings.app_version,
        "checks": {
            "api": "up",
            "notion": "configured" if settings.notion_configured else "missing credentials",
        },
    }


@app.get("/ready", tags=["Health"])
async def readiness_check(db: Annotated[AsyncSession, Depends(get_db)]) -> dict:
    """Readiness check; fails while the database is unreachable."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(f"Readiness check failed: {exc}")
        raise ServiceUnavailableException("Database unavailable", service="database") from exc
    return {"ready": True}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "devportal.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level="debug" if settings.debug else "info",
    )
