"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wattwise.api.config import get_settings
from wattwise.api.middleware.error_handler import ErrorHandlerMiddleware
from wattwise.api.middleware.rate_limit import RateLimitMiddleware
from wattwise.api.routers import catalog_router, recommendations_router, usage_router
from wattwise.api.services.catalog import load_catalog_or_empty

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Loads the catalog snapshot on startup.

    Parameters
    ----------
    app : FastAPI
        FastAPI application instance

    Yields
    ------
    None
        Control during application lifetime
    """
    logger.info("wattwise API starting up...")

    settings = get_settings()
    if getattr(app.state, "catalog", None) is None:
        app.state.catalog = load_catalog_or_empty(settings.CATALOG_PATH)
    logger.info(f"Catalog ready with {len(app.state.catalog.plans)} plans")

    yield

    logger.info("wattwise API shutting down")


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns
    -------
    FastAPI
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        license_info=settings.API_LICENSE,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.catalog = None

    # Add middleware (order matters! Last added = first executed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        RateLimitMiddleware,
        limit=settings.RATE_LIMIT,
        window=settings.RATE_WINDOW,
    )

    # Error handler middleware (should be last to catch all errors)
    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(usage_router)
    app.include_router(recommendations_router)
    app.include_router(catalog_router)

    @app.get("/", tags=["Root"])
    async def root() -> JSONResponse:
        """Root endpoint with API information."""
        return JSONResponse(
            content={
                "message": "wattwise API",
                "version": settings.API_VERSION,
                "docs": "/docs",
                "openapi": "/openapi.json",
            }
        )

    @app.get("/health", tags=["Health"])
    async def health() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(content={"status": "healthy"})

    return app


# Create application instance
app = create_app()
