"""
Uploaded file lookup for multipart forms.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from app.blobstore.base import BlobStore
from shared_schemas.photo_shopping import BlobKey

logger = logging.getLogger(__name__)


async def extract_upload(
    blob_store: BlobStore,
    uploads: Dict[str, List[BlobKey]],
    field_name: str
) -> Optional[BlobKey]:
    """
    Return the key of the blob uploaded through ``field_name``, or None if the user
    did not upload a file.

    Submitting the form without selecting a file either omits the field or produces
    an empty blob; empty blobs are deleted here and dropped from ``uploads``.

    Args:
        blob_store: Store that intercepted the upload
        uploads: Field name -> blob keys, as returned by ``blob_store.get_uploads``
        field_name: Name of the file input

    Returns:
        BlobKey of the uploaded file, or None
    """
    blob_keys = uploads.get(field_name)

    if not blob_keys:
        logger.info(f"No upload found for field '{field_name}'")
        return None

    # The form only carries a single file per input
    blob_key = blob_keys[0]

    blob_info = await asyncio.to_thread(blob_store.get_metadata, blob_key)
    if blob_info is None or blob_info.size == 0:
        logger.info(f"Empty upload for field '{field_name}', deleting blob {blob_key}")
        await asyncio.to_thread(blob_store.delete, blob_key)
        blob_keys.remove(blob_key)
        return None

    return blob_key


async def discard_uploads(blob_store: BlobStore, uploads: Dict[str, List[BlobKey]]) -> None:
    """
    Delete every blob stored for a request.

    Failures are logged and do not stop the remaining deletes.
    """
    for field_name, blob_keys in uploads.items():
        for blob_key in blob_keys:
            try:
                await asyncio.to_thread(blob_store.delete, blob_key)
            except Exception as e:
                logger.error(f"Failed to delete upload {blob_key} for field '{field_name}': {e}")
