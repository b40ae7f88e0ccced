"""Library catalog — FastAPI entry point.

Registers middleware, routers, exception handlers and lifecycle hooks. The
catalog vertical is mounted under /catalog.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from api.middleware import RequestContextMiddleware
from core.database import CatalogStore
from core.errors import CatalogError
from core.observability.logging_setup import setup_logging
from verticals.catalog.routers.common import render

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS", "http://localhost:3000,http://localhost:8000"
).split(",")
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text" if DEBUG else "json")
CREATE_TABLES = os.getenv("DB_CREATE_TABLES", "true").lower() == "true"


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store at startup, dispose it at shutdown."""
    setup_logging(LOG_LEVEL, LOG_FORMAT)
    store = CatalogStore()
    if CREATE_TABLES:
        await store.create_all()
    app.state.store = store
    logger.info("Catalog API started")
    try:
        yield
    finally:
        await store.close()
        logger.info("Catalog API shut down")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Local Library Catalog",
    description="Staff-facing catalog of authors, genres, books and book copies",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request id + access log
app.add_middleware(RequestContextMiddleware)

# ---------------------------------------------------------------------------
# Routers — verticals register here
# ---------------------------------------------------------------------------

from verticals.catalog.routers import router as catalog_router  # noqa: E402

app.include_router(catalog_router, prefix="/catalog", tags=["Catalog"])


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    """Not-found and store failures rendered as an HTML error page."""
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{exc.code}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return render("error", exc.to_context(), status_code=exc.http_status)


@app.exception_handler(Exception)
async def generic_error_handler(request: Request, exc: Exception):
    """Catch-all — never leaks internal details."""
    logger.exception(
        f"Unhandled error on {request.url.path}",
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return render(
        "error",
        {"title": "Error", "message": "An unexpected error occurred.", "status": 500},
        status_code=500,
    )


# ---------------------------------------------------------------------------
# Health & root
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    return {"status": "healthy", "version": "0.1.0"}


@app.get("/")
async def root():
    return RedirectResponse("/catalog/", status_code=302)
