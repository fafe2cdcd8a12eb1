"""FastAPI application for the journal sync service.

Provides REST API endpoints wrapping the journal_sync package for:
- Listing the records of one application
- Bulk create-or-update of records
- Bidirectional reconciliation of a client's records with the store
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the journal_sync package is importable by adding the project root to sys.path.
_project_root = str(Path(__file__).resolve().parents[3])
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from journal_sync import __version__
from journal_sync.errors import MissingRecordIdError, StoreError
from journal_sync.logging_config import configure_logging
from web.backend.app.dependencies import get_settings
from web.backend.app.routers import entries

configure_logging(get_settings().log_level)

app = FastAPI(
    title="Journal Sync API",
    description=(
        "REST API for synchronizing journal records between client "
        "applications and a shared store."
    ),
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS middleware (any origin may sync)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
    max_age=86400,
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(entries.router)


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("Store failure on {} {}: {}", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
    )


@app.exception_handler(MissingRecordIdError)
async def missing_id_handler(request: Request, exc: MissingRecordIdError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": str(exc)},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "Not Found",
                "path": request.url.path,
                "message": "Available paths: /api/entries, /api/sync",
            },
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# ---------------------------------------------------------------------------
# Root and health-check endpoints
# ---------------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root():
    """Return basic API information."""
    return {
        "status": "ok",
        "message": "Journal sync API is running",
        "endpoints": [
            "GET  /api/entries?appId=xxx",
            "POST /api/entries",
            "POST /api/sync",
        ],
        "docs": "/docs",
    }


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
