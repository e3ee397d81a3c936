"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request tracing), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gunpla_sekai.core.database import init_db
from gunpla_sekai.core.logging_config import get_logger, setup_logging
from gunpla_sekai.core.monitoring import initialize_logfire

from .api.v1 import (
    builds,
    collections,
    filters,
    grades,
    gunpla_cards,
    health,
    kits,
    milestones,
    mobile_suits,
    product_lines,
    release_types,
    reviews,
    search,
    series,
    timelines,
    uploads,
    users,
    webhooks,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging(log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Handles startup and shutdown events for the FastAPI application.
    """
    # Startup
    try:
        logger.info("Starting up Gunpla Sekai Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down Gunpla Sekai Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Gunpla Sekai Server API

    This API provides the backend services for the Gunpla Sekai community.
    It supports browsing the kit catalog, tracking collections, logging builds with milestones,
    reviewing kits across six categories and saving gunpla cards.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=settings.cors.allow_methods,
    allow_headers=settings.cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)


app.include_router(health.router, tags=["health"])
app.include_router(webhooks.router, prefix=f"{constant.API_V1_STR}/webhooks")
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
app.include_router(timelines.router, prefix=f"{constant.API_V1_STR}/timelines")
app.include_router(series.router, prefix=f"{constant.API_V1_STR}/series")
app.include_router(grades.router, prefix=f"{constant.API_V1_STR}/grades")
app.include_router(product_lines.router, prefix=f"{constant.API_V1_STR}/product-lines")
app.include_router(release_types.router, prefix=f"{constant.API_V1_STR}/release-types")
app.include_router(mobile_suits.router, prefix=f"{constant.API_V1_STR}/mobile-suits")
app.include_router(kits.router, prefix=f"{constant.API_V1_STR}/kits")
app.include_router(filters.router, prefix=f"{constant.API_V1_STR}/filters")
app.include_router(search.router, prefix=f"{constant.API_V1_STR}/search")
app.include_router(reviews.router, prefix=f"{constant.API_V1_STR}/reviews")
app.include_router(collections.router, prefix=f"{constant.API_V1_STR}/collections")
app.include_router(milestones.build_router, prefix=f"{constant.API_V1_STR}/builds")
app.include_router(builds.router, prefix=f"{constant.API_V1_STR}/builds")
app.include_router(milestones.router, prefix=f"{constant.API_V1_STR}/milestones")
app.include_router(uploads.router, prefix=f"{constant.API_V1_STR}/uploads")
app.include_router(gunpla_cards.router, prefix=f"{constant.API_V1_STR}/gunpla-cards")


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    uvicorn.run(
        "gunpla_sekai.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
