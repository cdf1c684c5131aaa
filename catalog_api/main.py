"""Catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_api.api.categories import router as categories_router
from catalog_api.api.collections import router as collections_router
from catalog_api.api.health import router as health_router
from catalog_api.api.middleware import error_payload, setup_middleware
from catalog_api.api.products import router as products_router
from catalog_api.api.shops import router as shops_router
from catalog_api.catalog.demo import seed_demo_catalog
from catalog_api.catalog.repository import SqlCatalogRepository
from catalog_api.catalog.service import CatalogService
from catalog_api.domain.exceptions import (
    CategoryIntegrityError,
    DomainError,
    NotFoundError,
)
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import async_session_factory, create_tables, engine
from catalog_api.infrastructure.logging_config import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    # Startup
    configure_logging(settings.log_level, settings.debug)
    logger.info(
        "Starting catalog API",
        version=settings.api_version,
        debug=settings.debug,
    )

    await create_tables()

    if settings.seed_demo_data:
        async with async_session_factory() as session:
            result = await seed_demo_catalog(CatalogService(SqlCatalogRepository(session)))
            await session.commit()
        logger.info("Demo data check complete", **result)

    yield

    # Shutdown
    logger.info("Shutting down catalog API")
    await engine.dispose()


app = FastAPI(
    title="Catalog API",
    description="Products, hierarchical categories and collections, and shops",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(collections_router)
app.include_router(shops_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def _error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_payload(request, error_code, message, details),
    )


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """Map domain errors to HTTP status codes."""
    details = [{"field": key, "message": str(value)} for key, value in exc.details.items()]

    if isinstance(exc, NotFoundError):
        return _error_response(request, 404, exc.error_code, exc.message, details)

    if isinstance(exc, CategoryIntegrityError):
        return _error_response(request, 409, exc.error_code, exc.message, details)

    logger.error(
        "Domain error in handler",
        path=request.url.path,
        method=request.method,
        error=exc.message,
    )
    return _error_response(request, 500, "INTERNAL_ERROR", "An internal error occurred", [])


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return _error_response(request, exc.status_code, error_code, message, details)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )

    return _error_response(request, 500, "INTERNAL_ERROR", "An internal error occurred", [])
