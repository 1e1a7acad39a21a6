"""
Custom exceptions for the Trending GIF Pipeline.

Every pipeline error carries an ErrorKind so that responses can be
serialized into a stable ``{code, message, detail}`` shape.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Stable error codes surfaced in invocation responses."""
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    MALFORMED_RESPONSE = "malformed_response"
    DOWNLOAD_FAILED = "download_failed"
    STORAGE_FAILED = "storage_failed"
    OBJECT_NOT_FOUND = "object_not_found"
    IMAGE_PROCESSING_FAILED = "image_processing_failed"
    INVALID_EVENT = "invalid_event"
    INVALID_KEY = "invalid_key"
    INTERNAL = "internal"


class PipelineError(Exception):
    """Base exception for all pipeline exceptions."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(self.message)


class TrendingApiError(PipelineError):
    """Exception raised when the trending API cannot be reached or errors."""

    kind = ErrorKind.UPSTREAM_UNAVAILABLE

    def __init__(self, detail: str, status_code: Optional[int] = None):
        self.status_code = status_code
        message = f"Trending API error: {detail}"
        super().__init__(message, detail=f"status {status_code}" if status_code else None)


class MalformedResponseError(PipelineError):
    """Exception raised when the trending API returns an unexpected body."""

    kind = ErrorKind.MALFORMED_RESPONSE

    def __init__(self, detail: str):
        message = f"Malformed trending response: {detail}"
        super().__init__(message)


class DownloadError(PipelineError):
    """Exception raised when an image download fails."""

    kind = ErrorKind.DOWNLOAD_FAILED

    def __init__(self, url: str, detail: str):
        self.url = url
        message = f"Download of {url} failed: {detail}"
        super().__init__(message, detail=url)


class StorageError(PipelineError):
    """Exception raised when a storage operation fails."""

    kind = ErrorKind.STORAGE_FAILED

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        message = f"Storage error during {operation}: {detail}"
        super().__init__(message, detail=operation)


class ObjectNotFoundError(StorageError):
    """Exception raised when an object does not exist in the bucket."""

    kind = ErrorKind.OBJECT_NOT_FOUND

    def __init__(self, key: str):
        self.key = key
        super().__init__("get_object", f"Object {key} not found")
        self.detail = key


class ImageProcessingError(PipelineError):
    """Exception raised when an image cannot be decoded or resized."""

    kind = ErrorKind.IMAGE_PROCESSING_FAILED

    def __init__(self, detail: str):
        message = f"Image processing error: {detail}"
        super().__init__(message)


class InvalidEventError(PipelineError):
    """Exception raised when a trigger event has an unexpected shape."""

    kind = ErrorKind.INVALID_EVENT

    def __init__(self, detail: str):
        message = f"Invalid event: {detail}"
        super().__init__(message)


class InvalidKeyError(PipelineError):
    """Exception raised when an object key cannot be mapped to a thumbnail key."""

    kind = ErrorKind.INVALID_KEY

    def __init__(self, key: str):
        self.key = key
        message = f"Key {key} is not an original image key"
        super().__init__(message, detail=key)
