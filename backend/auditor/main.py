"""
Site Readiness Auditor - FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auditor.config import settings
from auditor.api.v1.endpoints import audit, health
from auditor.logger import logger
from auditor.services.audit_runner import SiteAuditRunner, get_default_runner


def create_app(runner: Optional[SiteAuditRunner] = None) -> FastAPI:
    """Build the app; tests pass a runner with its own cache."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.APP_NAME}...")
        yield
        logger.info(f"Stopping {settings.APP_NAME}")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Crawls a bounded page sample and scores a site's readiness for AI answer engines",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.runner = runner or get_default_runner()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router, prefix="/api/v1")
    app.include_router(audit.router, prefix="/api/v1/audit")

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/docs"
        }

    return app


app = create_app()
