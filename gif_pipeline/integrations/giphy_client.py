"""
Client for the Giphy trending API.
"""

import copy
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from gif_pipeline.config import get_settings
from gif_pipeline.core.exceptions import DownloadError, MalformedResponseError, TrendingApiError
from gif_pipeline.core.logging import logger

# Giphy content rating, fixed to general audience
RATING = "g"
TRENDING_ENDPOINT = "/v1/gifs/trending"


class GiphyClient:
    """
    Client for requesting trending GIFs and downloading their originals.

    Use session() to share one connection pool across all requests of an
    invocation. Outside a session, each request opens its own short-lived
    client.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        limit: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the Giphy client, defaulting to values from settings."""
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.GIPHY_API
        self.base_url = (base_url or settings.GIPHY_BASE_URL).rstrip("/")
        self.limit = limit if limit is not None else settings.NUMBER_OF_GIFS
        self.timeout = httpx.Timeout(timeout if timeout is not None else settings.HTTP_TIMEOUT)
        self.transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport, follow_redirects=True)

    @asynccontextmanager
    async def session(self) -> AsyncIterator["GiphyClient"]:
        """Yield a copy of this client bound to one shared connection pool."""
        async with self._build_client() as http:
            bound = copy.copy(self)
            bound._http = http
            yield bound

    async def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        if self._http is not None:
            response = await self._http.get(url, params=params)
        else:
            async with self._build_client() as client:
                response = await client.get(url, params=params)
        response.raise_for_status()
        return response

    async def get_trending(self) -> Dict[str, Any]:
        """
        Request the current trending GIFs.

        Returns:
            Decoded JSON body of the trending endpoint

        Raises:
            TrendingApiError: If the request fails or returns an error status
            MalformedResponseError: If the body is not JSON
        """
        params = {
            "api_key": self.api_key,
            "limit": self.limit,
            "rating": RATING,
        }
        url = f"{self.base_url}{TRENDING_ENDPOINT}"

        try:
            response = await self._get(url, params=params)
        # httpx error text carries the full URL, api_key included
        except httpx.HTTPStatusError as e:
            detail = f"{e.response.status_code} {e.response.reason_phrase}"
            logger.error(f"HTTP error when calling Giphy API: {detail}")
            raise TrendingApiError(detail, status_code=e.response.status_code) from None
        except httpx.HTTPError as e:
            detail = type(e).__name__
            logger.error(f"Error making request to Giphy API: {detail}")
            raise TrendingApiError(detail) from None

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"body is not JSON: {str(e)}")

    async def download(self, url: str) -> bytes:
        """
        Download the full binary content at ``url``.

        Raises:
            DownloadError: If the request fails or returns an error status
        """
        try:
            response = await self._get(url)
        except httpx.HTTPError as e:
            raise DownloadError(url, str(e))
        return response.content
