"""
FastAPI application entry point for the Partnerboard API.

This module configures logging, CORS and the API routers, and manages the
database pool lifecycle. The database is optional: only the MFA endpoint needs
it, so startup continues when DATABASE_URL is not set.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from partnerboard import __version__
from partnerboard.api import api_router
from partnerboard.core.config import get_settings
from partnerboard.core.database import DatabaseNotConfiguredError, init_db, close_db

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
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
    """
    logger.info("Partnerboard API starting")
    if settings.database_url:
        try:
            await init_db()
            logger.info("Database connection pool initialized")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            # Continue startup - the dashboard endpoints do not need the DB
    else:
        logger.warning("DATABASE_URL not set; MFA code issuance is unavailable")

    yield

    logger.info("Partnerboard API shutting down")
    try:
        await close_db()
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")


app = FastAPI(
    title="Partnerboard API",
    version=__version__,
    description=(
        "Backend of the partner performance dashboard. Fetches partner "
        "metrics from the automation webhook and serves filtered, sorted "
        "views, plus password policy and email MFA code endpoints."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(DatabaseNotConfiguredError)
async def database_not_configured_handler(request: Request, exc: DatabaseNotConfiguredError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} needs the database: {exc}")
    return JSONResponse(status_code=500, content={"error": "Adatbázis nincs beállítva."})


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring and load balancer probes."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """
    Root endpoint providing API information.

    Returns:
        Dict with API name and version
    """
    return {
        "name": "Partnerboard API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "partnerboard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
