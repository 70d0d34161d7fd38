"""
Photo Shopping Service - Main FastAPI Application
Returns product shopping results for photos uploaded by users.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared_schemas.common import ErrorResponse
from app.core.config import settings
from app.core.dependencies import close_http_client, get_blob_store
from app.api import health, photo_shopping

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Runs on startup and shutdown.
    """
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    blob_store = get_blob_store()
    ensure_bucket_exists = getattr(blob_store, "ensure_bucket_exists", None)
    if ensure_bucket_exists is not None:
        try:
            ensure_bucket_exists()
            logger.info(f"Uploads bucket ready: {settings.UPLOADS_BUCKET}")
        except Exception as e:
            logger.error(f"Failed to initialize uploads bucket: {e}")
            # Continue anyway - health check reports the blob store as offline

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_http_client()
    logger.info("HTTP client closed")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Product shopping results for uploaded photos",
    version=settings.APP_VERSION,
    lifespan=lifespan
)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# Include API routers
app.include_router(health.router)
app.include_router(photo_shopping.router)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with service information."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "endpoints": {
            "health": {
                "GET /health": "Service and blob store health check"
            },
            "photo-shopping": {
                "GET /blobstore-upload-url": "URL the photo upload form posts to",
                "POST /handle-photo-shopping": "Shopping results for an uploaded photo"
            }
        },
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc",
            "openapi": "/openapi.json"
        }
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(detail="Internal server error").model_dump()
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )
