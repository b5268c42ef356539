"""cefleef - Main Application Entry Point."""

import logging

from fastapi import FastAPI

from cefleef.api.v1 import router as api_v1_router
from cefleef.config import get_settings
from cefleef.exceptions import setup_exception_handlers
from cefleef.parsers.registry import get_registry, load_builtin_parsers

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

load_builtin_parsers()
logger.info(
    "Starting %s v%s with parsers: %s",
    settings.app_name,
    settings.app_version,
    ", ".join(p["name"] for p in get_registry().list_parsers()),
)

app = FastAPI(
    title=settings.app_name,
    description="CEF and LEEF security event line parser",
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else "/api/openapi.json",
)

# Setup exception handlers for standardized error responses
setup_exception_handlers(app)

# Include API routers
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
    }
