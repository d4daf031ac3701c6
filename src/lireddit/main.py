# src/lireddit/main.py
"""Main entry point for the lireddit application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from lireddit.api.graphql import graphql_router
from lireddit.core.logging import configure_logging
from lireddit.core.settings import settings

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="lireddit API",
    description="GraphQL backend for a link-voting site",
    version=settings.app_version,
)

# Session cookies require credentials, so origins must be explicit.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

app.include_router(graphql_router, prefix="/graphql")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging(settings.log_level)
    logger.info("%s %s starting", settings.app_name, settings.app_version)


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
        "graphql": "/graphql",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("lireddit.main:app", host="0.0.0.0", port=4000, reload=settings.debug)
