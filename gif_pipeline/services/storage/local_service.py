"""
Local filesystem implementation for the Trending GIF Pipeline.
Used primarily for development and testing.
"""

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
import aiofiles.os

from gif_pipeline.config import get_settings
from gif_pipeline.core.exceptions import ObjectNotFoundError, StorageError
from gif_pipeline.core.logging import logger
from gif_pipeline.schemas import StoredObject
from gif_pipeline.services.storage.content_types import content_type_for


class LocalService:
    """
    Local filesystem implementation for storage operations.
    Objects of a bucket live under ``<base_dir>/<bucket>/<key>``.
    """

    def __init__(self, bucket_name: str, base_dir: Optional[str] = None):
        """Initialize the local service with base directory."""
        self.bucket_name = bucket_name
        self.base_dir = Path(base_dir or get_settings().LOCAL_STORAGE_DIR)
        self.bucket_dir = (self.base_dir / bucket_name).resolve()

        # Create directories if they don't exist
        os.makedirs(self.bucket_dir, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        path = (self.bucket_dir / key).resolve()
        if self.bucket_dir not in path.parents:
            raise StorageError("resolve_key", f"Key {key} escapes the bucket directory")
        return path

    async def put_object(self, key: str, body: bytes, content_type: Optional[str] = None) -> StoredObject:
        """
        Write an object to the local bucket directory.

        Raises:
            StorageError: If there's an error writing the object
        """
        try:
            path = self._path_for(key)
            await aiofiles.os.makedirs(path.parent, exist_ok=True)

            async with aiofiles.open(path, "wb") as f:
                await f.write(body)

            return StoredObject(
                bucket=self.bucket_name,
                key=key,
                size=len(body),
                etag=hashlib.md5(body).hexdigest(),
                content_type=content_type or content_type_for(key),
            )

        except StorageError:
            raise

        except Exception as e:
            logger.error(f"Error saving object to local filesystem: {str(e)}")
            raise StorageError("put_object", f"Failed to save {key}: {str(e)}")

    async def get_object(self, key: str) -> bytes:
        """
        Read an object from the local bucket directory.

        Raises:
            ObjectNotFoundError: If the object does not exist
            StorageError: If there's an error reading the object
        """
        try:
            path = self._path_for(key)
            async with aiofiles.open(path, "rb") as f:
                return await f.read()

        except FileNotFoundError:
            raise ObjectNotFoundError(key)

        except StorageError:
            raise

        except Exception as e:
            logger.error(f"Error reading object from local filesystem: {str(e)}")
            raise StorageError("get_object", f"Failed to read {key}: {str(e)}")

    async def list_objects(self, prefix: str = "") -> List[str]:
        """List object keys under a prefix."""
        keys = []
        for root, _, files in os.walk(self.bucket_dir):
            for name in files:
                key = Path(root, name).relative_to(self.bucket_dir).as_posix()
                if key.startswith(prefix):
                    keys.append(key)
        return sorted(keys)

    async def check_health(self) -> Dict[str, Any]:
        """Check that the bucket directory is writable."""
        writable = os.access(self.bucket_dir, os.W_OK)
        return {
            "status": "ok" if writable else "error",
            "backend": "local",
            "bucket": self.bucket_name,
        }
