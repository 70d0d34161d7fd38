"""
Paginated blob reads.
Blob stores cap the size of a single fetch, so whole blobs are assembled page by page.
"""

import logging

from app.blobstore.base import BlobStore
from shared_schemas.photo_shopping import BlobKey

logger = logging.getLogger(__name__)


def read_blob_bytes(blob_store: BlobStore, blob_key: BlobKey, fetch_size: int) -> bytes:
    """
    Read a whole blob by fetching consecutive byte ranges of ``fetch_size``.

    A page shorter than ``fetch_size`` marks the end of the blob; a blob whose size is an
    exact multiple of ``fetch_size`` ends with one empty page.

    Args:
        blob_store: Store holding the blob
        blob_key: Key of the blob to read
        fetch_size: Maximum bytes per fetch

    Returns:
        Blob content

    Raises:
        ValueError: If fetch_size is not positive
        BlobFetchError: If any page read fails (not retried)
    """
    if fetch_size <= 0:
        raise ValueError(f"fetch_size must be positive, got {fetch_size}")

    output = bytearray()
    current_byte_index = 0
    pages = 0

    while True:
        # End index is inclusive
        page = blob_store.fetch_data(blob_key, current_byte_index, current_byte_index + fetch_size - 1)
        output.extend(page)
        pages += 1

        if len(page) < fetch_size:
            break

        current_byte_index += fetch_size

    logger.debug(f"Read blob {blob_key}: {len(output)} bytes in {pages} fetches")
    return bytes(output)
