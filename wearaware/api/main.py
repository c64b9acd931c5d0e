"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wearaware.api import catalog, scans, users
from wearaware.api.dependencies import SessionDependency
from wearaware.config.settings import get_settings
from wearaware.db.session import init_db, ping
from wearaware.metrics.prometheus_exporter import metrics_app
from wearaware.monitoring.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    await init_db()
    logger.info("Database schema ready")
    yield


def create_app() -> FastAPI:
    """Initialise the FastAPI application."""

    configure_logging()
    settings = get_settings()
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        lifespan=lifespan,
    )
    app.include_router(users.router)
    app.include_router(scans.router)
    app.include_router(catalog.router)
    app.mount("/metrics", metrics_app())

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        content = {"error": "Internal server error"}
        # Production responses never carry exception text.
        if settings.environment != "prod":
            content["message"] = str(exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)

    @app.get("/", tags=["system"])
    async def index() -> dict[str, Any]:
        """Service name and the available route groups."""

        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "endpoints": {
                "health": "/api/health",
                "scans": "/api/scans",
                "users": "/api/users",
                "itemTypes": "/api/item-types",
                "fibers": "/api/fibers",
                "impact": "/api/impact",
                "labels": "/api/labels/parse",
                "metrics": "/metrics",
            },
        }

    @app.get("/api/health", tags=["system"])
    async def health_check(session: AsyncSession = SessionDependency) -> JSONResponse:
        """Readiness probe that also verifies the database connection."""

        try:
            await ping(session)
        except SQLAlchemyError as exc:
            logger.warning("Health check failed: %s", exc)
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "database": "disconnected", "error": str(exc)},
            )
        return JSONResponse(content={"status": "healthy", "database": "connected"})

    return app


app = create_app()
