"""
Invocation handlers shared by the cloud functions and the HTTP API.
"""

import asyncio
from typing import Any, Dict, List, Optional, Union

from gif_pipeline.dependencies import PipelineDependencies, get_dependencies
from gif_pipeline.schemas import InvocationResponse, serialize_outcome


async def fetch_trending_async(
    event: Any = None, dependencies: Optional[PipelineDependencies] = None
) -> Dict[str, Any]:
    """Run the Fetcher and return its ``{statusCode, body}`` envelope."""
    dependencies = dependencies or get_dependencies()
    response = await dependencies.fetcher.run(event)
    return response.to_dict()


async def generate_thumbnails_async(
    event: Any, dependencies: Optional[PipelineDependencies] = None
) -> Union[List[Any], Dict[str, Any]]:
    """
    Run the Thumbnailer and return its per-record outcomes, or the
    ``{statusCode, body}`` envelope when the event could not be read.
    """
    dependencies = dependencies or get_dependencies()
    result = await dependencies.thumbnailer.run(event)
    if isinstance(result, InvocationResponse):
        return result.to_dict()
    return [serialize_outcome(outcome) for outcome in result]


def fetch_trending(event: Any = None, context: Any = None) -> Dict[str, Any]:
    """Scheduled trigger entry point for the Fetcher."""
    return asyncio.run(fetch_trending_async(event))


def generate_thumbnails(event: Any, context: Any = None) -> Union[List[Any], Dict[str, Any]]:
    """Storage event entry point for the Thumbnailer."""
    return asyncio.run(generate_thumbnails_async(event))
