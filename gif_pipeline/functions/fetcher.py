"""
Fetcher stage of the Trending GIF Pipeline.

Requests the trending GIFs, downloads every original and stores it under
the ``original/`` prefix of the bucket.
"""

from typing import Any, List, Optional

from gif_pipeline.config import get_settings
from gif_pipeline.core.logging import logger
from gif_pipeline.integrations.giphy_client import GiphyClient
from gif_pipeline.schemas import (
    FetchOutcome,
    InvocationResponse,
    StoredObject,
    TrendingResponse,
    error_detail,
    serialize_outcome,
)
from gif_pipeline.services.keys import original_object_key
from gif_pipeline.services.storage.storage_service import StorageService
from gif_pipeline.utils.concurrency import gather_bounded

GIF_CONTENT_TYPE = "image/gif"


def extract_gif_urls(payload: Any) -> List[str]:
    """
    Keep the GIF entries of a trending response and return their original
    URLs in upstream order.

    Raises:
        MalformedResponseError: If the payload has no ``data`` list
    """
    response = TrendingResponse.parse_payload(payload)

    urls = []
    for item in response.data:
        if item.type != "gif":
            continue
        if not item.original_url:
            logger.warning("Skipping GIF entry without an original URL")
            continue
        urls.append(item.original_url)
    return urls


class Fetcher:
    """
    Stores the current trending GIFs in the bucket.
    """

    def __init__(
        self,
        giphy_client: GiphyClient,
        storage_service: StorageService,
        max_concurrency: Optional[int] = None,
    ):
        self.giphy_client = giphy_client
        self.storage_service = storage_service
        self.max_concurrency = (
            max_concurrency if max_concurrency is not None else get_settings().MAX_CONCURRENCY
        )

    async def _save_gif(self, giphy: GiphyClient, url: str) -> FetchOutcome:
        key = original_object_key(url)
        logger.debug(f"GIF name: {key}")
        try:
            content = await giphy.download(url)
            logger.info(f"Save to bucket {key}")
            return await self.storage_service.put_object(key, content, GIF_CONTENT_TYPE)
        except Exception as e:
            logger.error(f"Error saving GIF {url}: {str(e)}", exc_info=True)
            return False

    async def fetch(self) -> List[FetchOutcome]:
        """
        Download and store every trending GIF.

        Returns:
            One entry per GIF in upstream order, either the stored object or
            ``False`` when that GIF could not be saved

        Raises:
            TrendingApiError: If the trending API request fails
            MalformedResponseError: If the trending response is malformed
        """
        async with self.giphy_client.session() as giphy:
            logger.info("Get GIFs from Giphy Trending API")
            payload = await giphy.get_trending()

            gifs = extract_gif_urls(payload)
            logger.info(f"GIFs found: {len(gifs)}")
            logger.debug(f"GIFs: {gifs}")

            logger.info("Get GIF content from Giphy")
            return await gather_bounded(
                (self._save_gif(giphy, url) for url in gifs), self.max_concurrency
            )

    async def run(self, event: Any = None) -> InvocationResponse:
        """
        Invocation entry point. The trigger event is ignored.

        Returns:
            A 200 envelope with the per-GIF results, or a 500 envelope when
            the trending GIFs could not be listed
        """
        try:
            results = await self.fetch()
        except Exception as e:
            logger.error(f"Failed to get from Giphy: {str(e)}", exc_info=True)
            return InvocationResponse.build(500, {
                "message": "Failed to get from Giphy",
                "error": error_detail(e),
            })

        saved = sum(1 for result in results if isinstance(result, StoredObject))
        logger.info(f"Successfully saved {saved} of {len(results)} GIFs")
        return InvocationResponse.build(200, {
            "message": "Gifs Saved",
            "input": [serialize_outcome(result) for result in results],
        })
