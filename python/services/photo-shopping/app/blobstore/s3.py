"""
MinIO S3 blob store.
Persists uploaded photos in the uploads bucket and reads them back by byte range.
"""

import asyncio
import logging
import uuid
from typing import Dict, List, Optional
from urllib.parse import quote, unquote

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError
from starlette.datastructures import FormData, UploadFile

from app.core.config import settings
from app.core.exceptions import BlobFetchError
from app.utils.content_type import detect_content_type
from shared_schemas.photo_shopping import BlobInfo, BlobKey

logger = logging.getLogger(__name__)


class S3BlobStore:
    """Blob store backed by MinIO/S3."""

    def __init__(self, client=None, bucket: Optional[str] = None):
        """
        Initialize S3 client with MinIO configuration.

        Args:
            client: Pre-built boto3 S3 client (built from settings when omitted)
            bucket: Uploads bucket name (defaults to settings.UPLOADS_BUCKET)
        """
        self.bucket = bucket or settings.UPLOADS_BUCKET

        if client is None:
            # Parse endpoint to extract protocol and host
            endpoint_url = settings.MINIO_ENDPOINT
            if not endpoint_url.startswith(('http://', 'https://')):
                protocol = 'https' if settings.MINIO_SECURE else 'http'
                endpoint_url = f"{protocol}://{endpoint_url}"

            client = boto3.client(
                's3',
                endpoint_url=endpoint_url,
                aws_access_key_id=settings.MINIO_ACCESS_KEY,
                aws_secret_access_key=settings.MINIO_SECRET_KEY,
                config=Config(signature_version='s3v4'),
                region_name='us-east-1'  # MinIO doesn't care about region
            )
            logger.info(f"S3 blob store initialized with endpoint: {endpoint_url}")

        self.client = client

    async def get_uploads(self, form: FormData) -> Dict[str, List[BlobKey]]:
        """
        Store every file part of a multipart form as a new blob.

        Empty file parts (form submitted without selecting a file) are stored too,
        as zero-size blobs.

        Args:
            form: Parsed multipart form

        Returns:
            Mapping of form field name to the keys of its stored blobs
        """
        uploads: Dict[str, List[BlobKey]] = {}

        for field_name, value in form.multi_items():
            if not isinstance(value, UploadFile):
                continue

            blob_key = uuid.uuid4().hex
            content_type = detect_content_type(value.filename, value.content_type)
            extra_args = {
                'ContentType': content_type,
                'Metadata': {'filename': quote(value.filename or "")}
            }

            await asyncio.to_thread(
                self.client.upload_fileobj,
                value.file,
                self.bucket,
                blob_key,
                ExtraArgs=extra_args
            )
            logger.info(f"Stored upload for field '{field_name}': {self.bucket}/{blob_key}")

            uploads.setdefault(field_name, []).append(blob_key)

        return uploads

    def get_metadata(self, blob_key: BlobKey) -> Optional[BlobInfo]:
        """
        Load metadata for a blob.

        Returns:
            BlobInfo, or None if the blob does not exist
        """
        try:
            response = self.client.head_object(Bucket=self.bucket, Key=blob_key)
        except ClientError as e:
            error_code = e.response['Error']['Code']
            if error_code in ('404', 'NoSuchKey', 'NotFound'):
                return None
            logger.error(f"Failed to load metadata for {self.bucket}/{blob_key}: {e}")
            raise

        filename = response.get('Metadata', {}).get('filename')
        return BlobInfo(
            key=blob_key,
            size=response.get('ContentLength', 0),
            content_type=response.get('ContentType'),
            filename=unquote(filename) if filename else None,
            created_at=response.get('LastModified')
        )

    def fetch_data(self, blob_key: BlobKey, start: int, end: int) -> bytes:
        """
        Fetch the inclusive byte range [start, end] of a blob.

        A start index past the end of the blob yields b"".

        Raises:
            BlobFetchError: If the read fails
        """
        try:
            response = self.client.get_object(
                Bucket=self.bucket,
                Key=blob_key,
                Range=f"bytes={start}-{end}"
            )
            return response['Body'].read()

        except ClientError as e:
            error_code = e.response['Error']['Code']
            if error_code in ('InvalidRange', '416'):
                return b""
            logger.error(f"Failed to fetch {self.bucket}/{blob_key} [{start}-{end}]: {e}")
            raise BlobFetchError(f"Failed to fetch blob {blob_key}: {e}") from e
        except BotoCoreError as e:
            logger.error(f"Failed to fetch {self.bucket}/{blob_key} [{start}-{end}]: {e}")
            raise BlobFetchError(f"Failed to fetch blob {blob_key}: {e}") from e

    def delete(self, blob_key: BlobKey) -> None:
        """
        Delete a blob.

        Raises:
            ClientError: If deletion fails
        """
        try:
            self.client.delete_object(Bucket=self.bucket, Key=blob_key)
            logger.info(f"Deleted blob: {self.bucket}/{blob_key}")
        except ClientError as e:
            logger.error(f"Failed to delete {self.bucket}/{blob_key}: {e}")
            raise

    def check_connection(self) -> bool:
        """Return True if the uploads bucket is reachable."""
        try:
            self.client.head_bucket(Bucket=self.bucket)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Blob store connection check failed: {e}")
            return False

    def ensure_bucket_exists(self) -> None:
        """
        Ensure the uploads bucket exists, create if it doesn't.

        Raises:
            ClientError: If bucket creation fails
        """
        try:
            self.client.head_bucket(Bucket=self.bucket)
            logger.info(f"Bucket exists: {self.bucket}")
        except ClientError as e:
            error_code = e.response['Error']['Code']
            if error_code == '404':
                try:
                    self.client.create_bucket(Bucket=self.bucket)
                    logger.info(f"Created bucket: {self.bucket}")
                except ClientError as create_error:
                    logger.error(f"Failed to create bucket {self.bucket}: {create_error}")
                    raise
            else:
                logger.error(f"Error checking bucket {self.bucket}: {e}")
                raise
