"""
Shared dependencies for FastAPI endpoints.
"""

import logging
import threading
from typing import Annotated

from fastapi import Depends
import httpx

from app.blobstore.base import BlobStore
from app.blobstore.memory import InMemoryBlobStore
from app.blobstore.s3 import S3BlobStore
from app.clients.shopping_client import ShoppingQuerier
from app.core.config import BlobStoreBackend, settings

logger = logging.getLogger(__name__)


# HTTP Client singleton
_http_client: httpx.AsyncClient | None = None

# Blob store singleton
_blob_store: BlobStore | None = None
_blob_store_lock = threading.Lock()


async def get_http_client() -> httpx.AsyncClient:
    """
    Get or create the global HTTP client.
    Used for making requests to the shopping provider.
    """
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(
            timeout=settings.SHOPPING_TIMEOUT_SECONDS,
            follow_redirects=True
        )
    return _http_client


async def close_http_client():
    """Close the global HTTP client."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


def get_blob_store() -> BlobStore:
    """
    Get or create the process-wide blob store.
    Backend is selected by BLOB_STORE_BACKEND.
    """
    global _blob_store
    if _blob_store is None:
        # Runs in the threadpool; only one store may be built
        with _blob_store_lock:
            if _blob_store is None:
                if settings.BLOB_STORE_BACKEND == BlobStoreBackend.MEMORY:
                    logger.info("Using in-memory blob store")
                    _blob_store = InMemoryBlobStore()
                else:
                    _blob_store = S3BlobStore()
    return _blob_store


async def get_shopping_querier(
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)]
) -> ShoppingQuerier:
    """Build the shopping provider client on top of the shared HTTP client."""
    return ShoppingQuerier(client)


# Dependency annotations
BlobStoreDep = Annotated[BlobStore, Depends(get_blob_store)]
ShoppingQuerierDep = Annotated[ShoppingQuerier, Depends(get_shopping_querier)]
