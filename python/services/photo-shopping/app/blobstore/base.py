"""
Blob store interface.
Every backend exposes the same upload, metadata, range-read and delete contract.
"""

from typing import Dict, List, Optional, Protocol

from starlette.datastructures import FormData

from shared_schemas.photo_shopping import BlobInfo, BlobKey


class BlobStore(Protocol):
    async def get_uploads(self, form: FormData) -> Dict[str, List[BlobKey]]:
        """Persist every file part of the form and map field names to blob keys."""
        ...

    def get_metadata(self, blob_key: BlobKey) -> Optional[BlobInfo]: ...

    def fetch_data(self, blob_key: BlobKey, start: int, end: int) -> bytes:
        """Return bytes in the inclusive range [start, end], or b"" past the end."""
        ...

    def delete(self, blob_key: BlobKey) -> None: ...

    def check_connection(self) -> bool: ...
