"""In-memory blob store for local development and tests."""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from starlette.datastructures import FormData, UploadFile

from app.core.exceptions import BlobFetchError
from app.utils.content_type import detect_content_type
from shared_schemas.photo_shopping import BlobInfo, BlobKey

logger = logging.getLogger(__name__)


class InMemoryBlobStore:
    def __init__(self) -> None:
        self._blobs: Dict[BlobKey, Tuple[BlobInfo, bytes]] = {}
        self._lock = threading.Lock()

    def put(self, data: bytes, filename: Optional[str] = None, content_type: Optional[str] = None) -> BlobKey:
        blob_key = uuid.uuid4().hex
        info = BlobInfo(
            key=blob_key,
            size=len(data),
            content_type=detect_content_type(filename, content_type),
            filename=filename,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._blobs[blob_key] = (info, bytes(data))
        return blob_key

    async def get_uploads(self, form: FormData) -> Dict[str, List[BlobKey]]:
        uploads: Dict[str, List[BlobKey]] = {}
        for field_name, value in form.multi_items():
            if not isinstance(value, UploadFile):
                continue
            data = await value.read()
            blob_key = self.put(data, value.filename, value.content_type)
            logger.info(f"Stored upload for field '{field_name}' in memory: {blob_key} ({len(data)} bytes)")
            uploads.setdefault(field_name, []).append(blob_key)
        return uploads

    def get_metadata(self, blob_key: BlobKey) -> Optional[BlobInfo]:
        with self._lock:
            entry = self._blobs.get(blob_key)
        return entry[0] if entry else None

    def fetch_data(self, blob_key: BlobKey, start: int, end: int) -> bytes:
        with self._lock:
            entry = self._blobs.get(blob_key)
        if entry is None:
            raise BlobFetchError(f"Blob not found: {blob_key}")
        return entry[1][start:end + 1]

    def delete(self, blob_key: BlobKey) -> None:
        with self._lock:
            self._blobs.pop(blob_key, None)
        logger.info(f"Deleted blob from memory: {blob_key}")

    def check_connection(self) -> bool:
        return True

    def __contains__(self, blob_key: BlobKey) -> bool:
        with self._lock:
            return blob_key in self._blobs
