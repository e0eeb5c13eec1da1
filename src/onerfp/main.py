"""Main entry point for the 1RFP community API."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from onerfp.api.v1 import (
    alerts_router,
    mentions_router,
    organization_posts_router,
    organizations_router,
    posts_router,
    profiles_router,
    system_router,
)
from onerfp.core.settings import settings
from onerfp.services.email import get_email_sender

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Community API for nonprofits and funders",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(profiles_router, prefix="/api/v1")
app.include_router(organizations_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(organization_posts_router, prefix="/api/v1")
app.include_router(mentions_router, prefix="/api/v1")
app.include_router(alerts_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")


@app.on_event("shutdown")
async def on_shutdown() -> None:
    get_email_sender().close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Community API for nonprofits and funders",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("onerfp.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
