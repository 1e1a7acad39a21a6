"""
Pydantic models for the Trending GIF Pipeline.
This module contains the upstream payloads, trigger events and response models.
"""

import json
from typing import Any, Dict, List, Optional, Union
from urllib.parse import unquote_plus

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gif_pipeline.core.exceptions import ErrorKind, InvalidEventError, MalformedResponseError, PipelineError


class ImageRendition(BaseModel):
    """One rendition of a trending item."""
    model_config = ConfigDict(extra="ignore")

    url: Optional[str] = None


class ImageRenditions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    original: Optional[ImageRendition] = None


class TrendingItem(BaseModel):
    """Trending API entry model."""
    model_config = ConfigDict(extra="ignore")

    type: Optional[Any] = None
    images: ImageRenditions = Field(default_factory=ImageRenditions)

    @property
    def original_url(self) -> Optional[str]:
        if self.images.original is None:
            return None
        return self.images.original.url


class TrendingResponse(BaseModel):
    """Trending API response model."""
    model_config = ConfigDict(extra="ignore")

    data: List[TrendingItem]

    @classmethod
    def parse_payload(cls, payload: Any) -> "TrendingResponse":
        """
        Validate a decoded trending API body.

        Raises:
            MalformedResponseError: If the body does not carry a ``data`` list
        """
        if not isinstance(payload, dict) or "data" not in payload:
            raise MalformedResponseError("missing 'data' field")
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise MalformedResponseError(str(e))


class StoredObject(BaseModel):
    """Confirmation returned by a storage backend after a write."""
    bucket: str
    key: str
    size: int
    etag: Optional[str] = None
    generation: Optional[str] = None
    content_type: str = "application/octet-stream"


class ErrorDetail(BaseModel):
    """Stable error serialization contract."""
    code: ErrorKind
    message: str
    detail: Optional[str] = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorDetail":
        if isinstance(exc, PipelineError):
            return cls(code=exc.kind, message=exc.message, detail=exc.detail)
        return cls(code=ErrorKind.INTERNAL, message=str(exc), detail=type(exc).__name__)


def error_detail(exc: BaseException) -> Dict[str, Any]:
    """Serialize an exception into a JSON-ready error dictionary."""
    return ErrorDetail.from_exception(exc).model_dump(mode="json")


class StorageRecord(BaseModel):
    """A single object-creation notification."""
    key: str
    bucket: Optional[str] = None


class StorageEvent(BaseModel):
    """Thumbnailer trigger payload, normalized to a batch of records."""
    records: List[StorageRecord]

    @classmethod
    def parse_event(cls, event: Any) -> "StorageEvent":
        """
        Normalize an S3-style ``Records`` batch or a single GCS object
        notification into a StorageEvent.

        Raises:
            InvalidEventError: If the event matches neither shape
        """
        if not isinstance(event, dict):
            raise InvalidEventError("event must be an object")

        if "Records" in event:
            records = event["Records"]
            if not isinstance(records, list):
                raise InvalidEventError("'Records' must be a list")
            parsed = []
            for index, record in enumerate(records):
                try:
                    s3 = record["s3"]
                    key = s3["object"]["key"]
                except (KeyError, TypeError):
                    raise InvalidEventError(f"record {index} has no object key")
                bucket = (s3.get("bucket") or {}).get("name")
                # Only genuine S3 notifications carry URL-encoded keys
                if record.get("eventSource") == "aws:s3":
                    key = unquote_plus(key)
                parsed.append(StorageRecord(key=key, bucket=bucket))
            return cls(records=parsed)

        if "name" in event:
            return cls(records=[StorageRecord(key=event["name"], bucket=event.get("bucket"))])

        raise InvalidEventError("expected 'Records' or 'name'")


FetchOutcome = Union[StoredObject, bool]
ThumbnailOutcome = Union[StoredObject, ErrorDetail]


class InvocationResponse(BaseModel):
    """HTTP-style response envelope."""
    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(alias="statusCode")
    body: str

    @classmethod
    def build(cls, status_code: int, payload: Dict[str, Any]) -> "InvocationResponse":
        return cls(status_code=status_code, body=json.dumps(payload, indent=2))

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    def payload(self) -> Dict[str, Any]:
        return json.loads(self.body)


def serialize_outcome(outcome: Union[StoredObject, ErrorDetail, bool]) -> Any:
    if isinstance(outcome, BaseModel):
        return outcome.model_dump(mode="json")
    return outcome
