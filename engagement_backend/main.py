"""
FastAPI application entry point for the Engagement Analytics API.

This module configures logging and CORS, manages the database pool lifecycle,
registers the predictive analytics router, and starts the ASGI server when run
directly.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from engagement_backend import __version__
from engagement_backend.core.config import get_settings
from engagement_backend.core.database import init_db, close_db
from engagement_backend.api.predictive import router as predictive_router, reset_singletons

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    On startup:
        - Initialize database connection pool when DATABASE_URL is configured

    On shutdown:
        - Close database connection pool
        - Drop the cached engine, analytics cache and state store
    """
    settings = get_settings()

    # Startup
    logger.info(f"Engagement Analytics API starting (data source: {settings.data_source})")
    if settings.database_url:
        try:
            await init_db()
            logger.info("Database connection pool initialized")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            # Continue startup; database-backed endpoints answer 503 until it recovers
    else:
        logger.info("DATABASE_URL not set; running without a database")

    yield

    # Shutdown
    logger.info("Engagement Analytics API shutting down")
    reset_singletons()
    try:
        await close_db()
        logger.info("Database connection pool closed")
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")


# Create FastAPI application
app = FastAPI(
    title="Engagement Analytics API",
    version=__version__,
    description=(
        "FastAPI backend for the WhatsApp engagement dashboard. "
        "Provides attendance, conversion and response-time forecasts, "
        "predictive alerts, recommendations, temporal patterns and "
        "sentiment analysis."
    ),
    lifespan=lifespan,
)

# Dashboard dev servers
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Router carries its own /predictive-analytics prefix
app.include_router(predictive_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer probes.

    Returns:
        Dict with status 'healthy'
    """
    return {"status": "healthy"}


@app.get("/")
async def root():
    """
    Root endpoint providing API information.

    Returns:
        Dict with API name and version
    """
    return {
        "name": "Engagement Analytics API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "engagement_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
