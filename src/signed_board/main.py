# src/signed_board/main.py
"""Main entry point for the Signed Board application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from signed_board.api.v1 import messages_router, signing_router
from signed_board.core.settings import settings
from signed_board.services.canonical import CANONICAL_VERSION

logging.basicConfig(
    level=settings.numeric_log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Signed Board API",
    description="Accepts messages only when they carry a valid ECDSA P-256 signature",
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

# Include API routers
app.include_router(signing_router, prefix=settings.api_prefix)
app.include_router(messages_router, prefix=settings.api_prefix)


@app.on_event("startup")
async def on_startup() -> None:
    prefix = settings.api_prefix
    logger.info("%s %s started", settings.app_name, settings.app_version)
    logger.info("1. GET %s/sign-test for a freshly signed sample message", prefix)
    logger.info("2. POST that JSON body to %s/submit", prefix)
    logger.info("3. GET %s/messages to list verified messages", prefix)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, object]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "signature_scheme": "ECDSA-P256-SHA256",
        "canonical_version": CANONICAL_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("signed_board.main:app", host=settings.host, port=settings.port, reload=settings.debug)
