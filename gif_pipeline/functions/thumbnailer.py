"""
Thumbnailer stage of the Trending GIF Pipeline.

Handles object-creation notifications for originals and writes a fixed
width thumbnail next to each one under the ``thumbnail/`` prefix.
"""

from typing import Any, List, Optional, Union

from gif_pipeline.config import get_settings
from gif_pipeline.core.logging import logger
from gif_pipeline.schemas import (
    ErrorDetail,
    InvocationResponse,
    StorageEvent,
    StorageRecord,
    ThumbnailOutcome,
    error_detail,
)
from gif_pipeline.services.keys import thumbnail_key
from gif_pipeline.services.processing.thumbnail_generator import ThumbnailGenerator
from gif_pipeline.services.storage.storage_service import StorageService
from gif_pipeline.utils.concurrency import gather_bounded


class Thumbnailer:
    """
    Creates static thumbnails for newly stored originals.
    """

    def __init__(
        self,
        storage_service: StorageService,
        thumbnail_generator: Optional[ThumbnailGenerator] = None,
        max_concurrency: Optional[int] = None,
    ):
        self.storage_service = storage_service
        self.thumbnail_generator = thumbnail_generator or ThumbnailGenerator()
        self.max_concurrency = (
            max_concurrency if max_concurrency is not None else get_settings().MAX_CONCURRENCY
        )

    async def process_record(self, record: StorageRecord) -> ThumbnailOutcome:
        """
        Resize one original and store the thumbnail.

        Failures are logged and returned as an ErrorDetail instead of raised.
        """
        original_key = record.key
        try:
            logger.info(f"Resizing {original_key}")
            destination = thumbnail_key(original_key)

            logger.debug(f"Get original from bucket: {original_key}")
            original = await self.storage_service.get_object(original_key)

            logger.debug("Resize original to thumbnail")
            thumbnail = await self.thumbnail_generator.generate(original)
            logger.debug(f"Resized {original_key} to {len(thumbnail)} bytes")

            logger.debug(f"Send thumbnail to bucket: {destination}")
            return await self.storage_service.put_object(destination, thumbnail)

        except Exception as e:
            logger.error(f"Error creating thumbnail for {original_key}: {str(e)}", exc_info=True)
            return ErrorDetail.from_exception(e)

    async def process(self, records: List[StorageRecord]) -> List[ThumbnailOutcome]:
        return await gather_bounded(
            (self.process_record(record) for record in records), self.max_concurrency
        )

    async def run(self, event: Any) -> Union[List[ThumbnailOutcome], InvocationResponse]:
        """
        Invocation entry point.

        Returns:
            One outcome per notification, or a 500 envelope when the event
            could not be turned into a batch
        """
        try:
            storage_event = StorageEvent.parse_event(event)
        except Exception as e:
            logger.error(f"Failed to resize thumbnails: {str(e)}", exc_info=True)
            return InvocationResponse.build(500, {
                "message": "Failed to resize thumbnails",
                "error": error_detail(e),
            })

        return await self.process(storage_event.records)
