"""
Health check endpoints.
"""

import asyncio
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.dependencies import BlobStoreDep
from shared_schemas.photo_shopping import HealthResponse, ServiceStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def get_health_status(blob_store: BlobStoreDep):
    """
    Health check endpoint.

    Returns service status, version and blob store connection.
    """
    blob_store_ok = await asyncio.to_thread(blob_store.check_connection)

    health = HealthResponse(
        status="healthy" if blob_store_ok else "degraded",
        version=settings.APP_VERSION,
        services=[
            ServiceStatus(
                name="Blob Store",
                status="online" if blob_store_ok else "offline"
            )
        ]
    )

    if not blob_store_ok:
        logger.error("Health check failed: blob store unreachable")
        return JSONResponse(status_code=503, content=health.model_dump())

    return health
