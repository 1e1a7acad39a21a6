"""
Storage service for the Trending GIF Pipeline.
This is a facade that abstracts the underlying storage implementation.
"""

from typing import Any, Dict, List, Optional, Protocol

from gif_pipeline.config import get_settings
from gif_pipeline.core.logging import logger
from gif_pipeline.schemas import StoredObject
from gif_pipeline.services.storage.gcs_service import GCSService
from gif_pipeline.services.storage.local_service import LocalService


class StorageBackend(Protocol):
    """Operations every storage backend provides for one bucket."""

    bucket_name: str

    async def put_object(self, key: str, body: bytes, content_type: Optional[str] = None) -> StoredObject:
        ...

    async def get_object(self, key: str) -> bytes:
        ...

    async def list_objects(self, prefix: str = "") -> List[str]:
        ...

    async def check_health(self) -> Dict[str, Any]:
        ...


class StorageService:
    """
    Service for handling storage operations.
    This service provides a unified interface for different storage backends.
    """

    def __init__(self, backend: Optional[StorageBackend] = None, bucket_name: Optional[str] = None):
        """Initialize the storage service with appropriate backend."""
        if backend is not None:
            self.storage = backend
            return

        settings = get_settings()
        bucket_name = bucket_name or settings.BUCKET

        # Use local storage for development, GCS for production
        if settings.DEV_MODE:
            self.storage = LocalService(bucket_name)
        else:
            self.storage = GCSService(bucket_name)

        logger.info(f"Using {type(self.storage).__name__} for bucket {bucket_name}")

    @property
    def bucket_name(self) -> str:
        return self.storage.bucket_name

    async def put_object(self, key: str, body: bytes, content_type: Optional[str] = None) -> StoredObject:
        """
        Write an object to the bucket.

        Args:
            key: Object key
            body: Object content
            content_type: Content type (optional)

        Returns:
            Confirmation of the stored object

        Raises:
            StorageError: If there's an error writing the object
        """
        logger.debug(f"Writing {len(body)} bytes to {key}")
        return await self.storage.put_object(key, body, content_type)

    async def get_object(self, key: str) -> bytes:
        """
        Read an object's full content.

        Raises:
            ObjectNotFoundError: If the object does not exist
            StorageError: If there's an error reading the object
        """
        logger.debug(f"Reading {key}")
        return await self.storage.get_object(key)

    async def list_objects(self, prefix: str = "") -> List[str]:
        return await self.storage.list_objects(prefix)

    async def check_health(self) -> Dict[str, Any]:
        return await self.storage.check_health()
