"""
Process-wide dependencies for the Trending GIF Pipeline.

Clients are built once per process and handed to the pipeline stages,
so tests can construct the stages with fakes instead.
"""

from functools import lru_cache
from typing import Optional

from gif_pipeline.functions.fetcher import Fetcher
from gif_pipeline.functions.thumbnailer import Thumbnailer
from gif_pipeline.integrations.giphy_client import GiphyClient
from gif_pipeline.services.processing.thumbnail_generator import ThumbnailGenerator
from gif_pipeline.services.storage.storage_service import StorageService


class PipelineDependencies:
    """
    Holds the shared clients and the two pipeline stages built from them.
    """

    def __init__(
        self,
        storage_service: StorageService,
        giphy_client: Optional[GiphyClient] = None,
        thumbnail_generator: Optional[ThumbnailGenerator] = None,
    ):
        self.storage_service = storage_service
        self.giphy_client = giphy_client or GiphyClient()
        self.thumbnail_generator = thumbnail_generator or ThumbnailGenerator()

        self.fetcher = Fetcher(self.giphy_client, self.storage_service)
        self.thumbnailer = Thumbnailer(self.storage_service, self.thumbnail_generator)


@lru_cache()
def get_dependencies() -> PipelineDependencies:
    return PipelineDependencies(storage_service=StorageService())
