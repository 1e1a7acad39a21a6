"""
Google Cloud Storage (GCS) implementation for the Trending GIF Pipeline.
"""

import asyncio
from typing import Any, Dict, List, Optional

from google.cloud import storage
from google.cloud.exceptions import NotFound
from google.oauth2 import service_account

from gif_pipeline.config import get_settings
from gif_pipeline.core.exceptions import ObjectNotFoundError, StorageError
from gif_pipeline.core.logging import logger
from gif_pipeline.schemas import StoredObject
from gif_pipeline.services.storage.content_types import content_type_for


def build_client() -> storage.Client:
    """
    Create a storage client.
    Uses the inline service account JSON when configured, default credentials otherwise.
    """
    settings = get_settings()
    service_account_info = settings.GCP_SERVICE_ACCOUNT_INFO

    if service_account_info:
        credentials = service_account.Credentials.from_service_account_info(info=service_account_info)
        logger.info("Initialized GCS client with service account JSON from settings")
        return storage.Client(project=settings.GCP_PROJECT_ID or None, credentials=credentials)

    logger.info("Initialized GCS client with application default credentials")
    return storage.Client(project=settings.GCP_PROJECT_ID or None)


class GCSService:
    """
    Google Cloud Storage implementation for storage operations.
    The client library is blocking, so every call runs in a worker thread.
    """

    def __init__(self, bucket_name: str, client: Optional[storage.Client] = None):
        """Initialize the GCS service for a single bucket."""
        self.bucket_name = bucket_name
        self.client = client or build_client()
        self.bucket = self.client.bucket(bucket_name)

    def _put(self, key: str, body: bytes, content_type: str) -> StoredObject:
        blob = self.bucket.blob(key)
        blob.upload_from_string(body, content_type=content_type)
        return StoredObject(
            bucket=self.bucket_name,
            key=key,
            size=len(body),
            etag=blob.etag,
            generation=str(blob.generation) if blob.generation is not None else None,
            content_type=content_type,
        )

    async def put_object(self, key: str, body: bytes, content_type: Optional[str] = None) -> StoredObject:
        """
        Write an object to the bucket, overwriting any existing object.

        Args:
            key: Object key
            body: Object content
            content_type: Content type, derived from the key extension if omitted

        Returns:
            Confirmation of the stored object

        Raises:
            StorageError: If the upload fails
        """
        content_type = content_type or content_type_for(key)
        try:
            return await asyncio.to_thread(self._put, key, body, content_type)
        except Exception as e:
            logger.error(f"Error saving object to GCS: {str(e)}")
            raise StorageError("put_object", f"Failed to save {key} to GCS: {str(e)}")

    async def get_object(self, key: str) -> bytes:
        """
        Read an object's full content.

        Raises:
            ObjectNotFoundError: If the object does not exist
            StorageError: If the download fails
        """
        blob = self.bucket.blob(key)
        try:
            return await asyncio.to_thread(blob.download_as_bytes)
        except NotFound:
            raise ObjectNotFoundError(key)
        except Exception as e:
            logger.error(f"Error getting object from GCS: {str(e)}")
            raise StorageError("get_object", f"Failed to get {key} from GCS: {str(e)}")

    async def list_objects(self, prefix: str = "") -> List[str]:
        """List object keys under a prefix."""
        try:
            blobs = await asyncio.to_thread(lambda: list(self.client.list_blobs(self.bucket_name, prefix=prefix)))
            return [blob.name for blob in blobs]
        except Exception as e:
            logger.error(f"Error listing objects in GCS: {str(e)}")
            raise StorageError("list_objects", f"Failed to list objects in GCS: {str(e)}")

    async def check_health(self) -> Dict[str, Any]:
        """Check that the bucket is reachable."""
        try:
            exists = await asyncio.to_thread(self.bucket.exists)
            return {
                "status": "ok" if exists else "error",
                "backend": "gcs",
                "bucket": self.bucket_name,
            }
        except Exception as e:
            logger.error(f"GCS health check failed: {str(e)}")
            return {"status": "error", "backend": "gcs", "bucket": self.bucket_name, "error": str(e)}
