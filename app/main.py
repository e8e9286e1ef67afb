# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Media Resolution API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import application_exception_handler, validation_exception_handler
from app.routers import admin, health, media
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the configuration the process started with; the Supabase client
    is created lazily on first use.
    """
    logger.info(f"Starting Media Resolution API in {settings.ENVIRONMENT} mode")
    logger.info(f"Cloudinary cloud: {settings.CLOUDINARY_CLOUD_NAME}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Media Resolution API")


# Create FastAPI application
app = FastAPI(
    title="Media Resolution API",
    description="""
## Media identity & resolution for the practice website

Pages refer to images and videos by stable placeholder IDs such as
`home-hero-image`. This API turns those IDs into Cloudinary delivery URLs.

### Resolution order

1. An ID containing `/` is already a Cloudinary public ID
2. A persisted placeholder link (assigned by an admin)
3. The built-in fallback table for legacy placeholders
4. Otherwise `404 MEDIA_NOT_FOUND`

### Quick Start

```bash
# Resolve a placeholder
curl http://localhost:8000/api/v1/media/resolve/home-hero-image?width=1200

# Register an uploaded asset, then link it
curl -X POST http://localhost:8000/api/v1/admin/assets \\
  -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\
  -d '{"public_id": "hero/spring", "alt_text": "Clinic lobby"}'
curl -X PUT http://localhost:8000/api/v1/admin/links/home-hero-image \\
  -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\
  -d '{"public_id": "hero/spring", "area": "hero"}'
```
""",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Media",
            "description": "Resolve placeholders and build delivery URLs",
        },
        {
            "name": "Admin",
            "description": "Register assets, manage links, inspect placeholders",
        },
        {
            "name": "Auth",
            "description": "Authentication endpoints for verifying JWT tokens",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(ApplicationError, application_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1",
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Public media endpoints
app.include_router(
    media.router,
    prefix="/api/v1",
    tags=["Media"]
)

# Admin endpoints
app.include_router(
    admin.router,
    prefix="/api/v1",
    tags=["Admin"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Media Resolution API",
        "version": health.API_VERSION,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
